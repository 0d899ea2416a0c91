"""
Test cases for YAML configuration loading.
"""
import os
import tempfile
import unittest
from unittest import mock
import sys
from pathlib import Path

import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hearme.config import load_config, DEFAULT_CONFIG_PATH, STABILITY_THRESHOLD, DEBOUNCE_INTERVAL_MS, MAX_HANDS

ENV_KEYS = ("PORT", "HEARME_DATA_DIR", "HEARME_BACKEND_URL", "HEARME_USER_ID")


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        patcher = mock.patch.dict(os.environ, {})
        patcher.start()
        self.addCleanup(patcher.stop)
        for key in ENV_KEYS:
            os.environ.pop(key, None)

    def test_default_config(self):
        cfg = load_config()

        self.assertEqual(cfg.gestures.stabilizer.stability_threshold, STABILITY_THRESHOLD)
        self.assertEqual(cfg.gestures.stabilizer.debounce_interval_ms, DEBOUNCE_INTERVAL_MS)
        self.assertFalse(cfg.gestures.stabilizer.reset_debounce_on_hand_lost)
        self.assertEqual(cfg.mediapipe.max_num_hands, MAX_HANDS)
        self.assertEqual(cfg.backend.base_url, "http://localhost:4000")
        self.assertEqual(cfg.backend.user_id, "student1")
        self.assertEqual(cfg.server.port, 4000)
        self.assertEqual(cfg.server.log_path, Path("data") / "logs.json")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/hearme.yaml")

    def test_custom_file_with_defaults_for_stabilizer(self):
        with open(DEFAULT_CONFIG_PATH) as f:
            data = yaml.safe_load(f)
        data['gestures'] = {'stabilizer': {'stability_threshold': 8}}
        data['backend']['base_url'] = "http://example.test:9000/"

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.yaml"
            path.write_text(yaml.safe_dump(data))
            cfg = load_config(str(path))

        self.assertEqual(cfg.gestures.stabilizer.stability_threshold, 8)
        self.assertEqual(cfg.gestures.stabilizer.debounce_interval_ms, DEBOUNCE_INTERVAL_MS)
        self.assertEqual(cfg.backend.base_url, "http://example.test:9000")

    def test_environment_overrides(self):
        os.environ.update({
            "PORT": "5050",
            "HEARME_DATA_DIR": "/tmp/hearme",
            "HEARME_BACKEND_URL": "http://backend:5050/",
            "HEARME_USER_ID": "student2",
        })
        cfg = load_config()

        self.assertEqual(cfg.server.port, 5050)
        self.assertEqual(cfg.server.log_path, Path("/tmp/hearme") / "logs.json")
        self.assertEqual(cfg.backend.base_url, "http://backend:5050")
        self.assertEqual(cfg.backend.user_id, "student2")


if __name__ == '__main__':
    unittest.main()

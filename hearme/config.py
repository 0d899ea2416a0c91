"""
Configuration management for the HearMe gesture and backend services.
"""
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

# Reference behaviour constants
STABILITY_THRESHOLD = 5
DEBOUNCE_INTERVAL_MS = 1200
MAX_HANDS = 1


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class StabilizerConfig:
    """Temporal stabilizer configuration."""
    stability_threshold: int = STABILITY_THRESHOLD
    debounce_interval_ms: int = DEBOUNCE_INTERVAL_MS
    reset_debounce_on_hand_lost: bool = False


@dataclass
class GesturesConfig:
    """Gesture recognition configuration."""
    stabilizer: StabilizerConfig


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    show_label: bool
    window_name: str


@dataclass
class BackendConfig:
    """Where gesture/speech logs are submitted."""
    base_url: str
    user_id: str
    timeout_s: float


@dataclass
class ServerConfig:
    """Backend HTTP server and log store settings."""
    host: str
    port: int
    data_dir: str
    log_file: str
    default_limit: int

    @property
    def log_path(self) -> Path:
        return Path(self.data_dir) / self.log_file


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GesturesConfig
    display: DisplayConfig
    backend: BackendConfig
    server: ServerConfig


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file and apply environment overrides.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    cfg = _dict_to_config(data)
    _apply_env_overrides(cfg)
    return cfg


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data.get('max_num_hands', MAX_HANDS),
        model_complexity=mp_data.get('model_complexity', 0),
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    stab_data = data['gestures'].get('stabilizer') or {}
    stabilizer = StabilizerConfig(
        stability_threshold=stab_data.get('stability_threshold', STABILITY_THRESHOLD),
        debounce_interval_ms=stab_data.get('debounce_interval_ms', DEBOUNCE_INTERVAL_MS),
        reset_debounce_on_hand_lost=stab_data.get('reset_debounce_on_hand_lost', False)
    )
    gestures = GesturesConfig(stabilizer=stabilizer)

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        show_label=display_data['show_label'],
        window_name=display_data['window_name']
    )

    backend_data = data['backend']
    backend = BackendConfig(
        base_url=backend_data['base_url'].rstrip('/'),
        user_id=backend_data['user_id'],
        timeout_s=float(backend_data['timeout_s'])
    )

    server_data = data['server']
    server = ServerConfig(
        host=server_data['host'],
        port=int(server_data['port']),
        data_dir=server_data['data_dir'],
        log_file=server_data['log_file'],
        default_limit=int(server_data['default_limit'])
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        display=display,
        backend=backend,
        server=server
    )


def _apply_env_overrides(cfg: Cfg) -> None:
    """Override selected settings from the environment (.env is loaded by entry points)."""
    if os.getenv("PORT"):
        cfg.server.port = int(os.environ["PORT"])
    if os.getenv("HEARME_DATA_DIR"):
        cfg.server.data_dir = os.environ["HEARME_DATA_DIR"]
    if os.getenv("HEARME_BACKEND_URL"):
        cfg.backend.base_url = os.environ["HEARME_BACKEND_URL"].rstrip('/')
    if os.getenv("HEARME_USER_ID"):
        cfg.backend.user_id = os.environ["HEARME_USER_ID"]

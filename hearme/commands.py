"""
Command line actions for the SOS alert and the mock translator.
"""
import argparse
import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp
from dotenv import load_dotenv

from .client import BackendClient
from .config import load_config

logger = logging.getLogger(__name__)

DEFAULT_SOS_LOCATION = "Unknown"
DEFAULT_SOS_MESSAGE = "SOS from web UI"


async def send_sos(client: BackendClient, location: str = DEFAULT_SOS_LOCATION,
                   message: str = DEFAULT_SOS_MESSAGE) -> Optional[Dict[str, Any]]:
    """Store an SOS alert and print the backend's answer"""
    try:
        data = await client.send_sos(location=location, message=message)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"❌ SOS error: {e}")
        print(f"SOS failed: {e}")
        return None

    print(f"SOS sent: {data.get('message') or 'ok'}")
    return data


async def translate_text(client: BackendClient, text: str, target: str = "en") -> Optional[str]:
    """Translate text through the backend and print the result"""
    if not text.strip():
        print("Enter text or speak something first")
        return None

    try:
        translated = await client.translate(text, target=target)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"❌ Translate error: {e}")
        print(f"Translate error: {e}")
        return None

    print(translated or "[no response]")
    return translated


async def _run_with_client(cfg_path: Optional[str], action):
    cfg = load_config(cfg_path)
    client = BackendClient.from_config(cfg.backend)
    try:
        return await action(client)
    finally:
        await client.close()


def sos_cli():
    parser = argparse.ArgumentParser(description="Send an SOS alert to the HearMe backend")
    parser.add_argument("--location", default=DEFAULT_SOS_LOCATION)
    parser.add_argument("--message", default=DEFAULT_SOS_MESSAGE)
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    parser.add_argument("--config", help="Path to YAML config (defaults to the packaged one)")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    if not args.yes:
        answer = input("Send SOS? This will store an alert in the backend. [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("SOS cancelled")
            return

    asyncio.run(_run_with_client(
        args.config, lambda client: send_sos(client, args.location, args.message)
    ))


def translate_cli():
    parser = argparse.ArgumentParser(description="Translate text with the HearMe mock translator")
    parser.add_argument("text", nargs="+", help="Text to translate")
    parser.add_argument("--target", default="en", help="Target language code")
    parser.add_argument("--config", help="Path to YAML config (defaults to the packaged one)")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    asyncio.run(_run_with_client(
        args.config, lambda client: translate_text(client, " ".join(args.text), args.target)
    ))

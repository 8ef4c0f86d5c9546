"""Example: drive the kiosk through the gateway (no Flask).

The gateway is resolved from settings once, exactly as the web app does it.
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "kiosk_attendance"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from kiosk_attendance.container import build_container
from kiosk_attendance.core.exceptions import GatewayError


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(app_config=vars(settings))
    gateway = container.gateway
    print(f"data mode: {container.data_mode.value}")

    try:
        checked_in = gateway.check_in("Example Student")
    except GatewayError as e:
        print(f"check-in failed: {e.message}")
        return

    print(gateway.list_checked_in())
    print(gateway.check_out(checked_in["checkIn"]["id"], 5))


if __name__ == "__main__":
    main()

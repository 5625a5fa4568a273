"""
Agenda entry point.
Prints a profile's schedule for one day or week.

Usage:
    python scripts/agenda.py <identity> [YYYY-MM-DD] [--week]
"""

import sys
import time
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from slot_calendar.core.calendar_controller import CalendarController
from slot_calendar.core.config_manager import Config
from slot_calendar.models.common import to_date
from slot_calendar.services.local_cache import LocalCache
from slot_calendar.services.notification_service import today_in_timezone
from slot_calendar.services.persistence_gateway import PersistenceGateway
from slot_calendar.utils.formatting import format_day_agenda, format_week_agenda
from slot_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)


def main(argv: list) -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = [a for a in argv if not a.startswith("--")]
    if not args:
        print(__doc__)
        return 1

    if not Config.validate():
        logger.error("Configuration validation failed")
        return 1

    identity = args[0]
    try:
        day = to_date(args[1]) if len(args) > 1 else today_in_timezone()
    except ValueError as e:
        logger.error(f"Invalid date: {e}")
        return 1

    start_time = time.time()

    controller = CalendarController(
        gateway=PersistenceGateway(),
        cache=LocalCache(),
        current_date=day,
    )
    try:
        controller.mount()
        controller.set_identity(identity)
        if controller.error_message:
            logger.warning(f"{controller.error_message} Showing cached schedule.")

        if "--week" in argv:
            print(format_week_agenda(controller.store, controller.current_date))
        else:
            print(format_day_agenda(controller.store, controller.current_date))
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1

    finally:
        controller.unmount()
        logger.info(f"Total execution time: {time.time() - start_time:.2f} seconds")


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

"""
Availability engine setup.
Creates the SQLite schema and registers the first user.
Run once before using 'python scripts/show_calendar.py'.
"""

import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from availability.core.config_manager import Config
from availability.services.service_factory import ServiceFactory
from availability.services.user_directory import SQLiteUserDirectory
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)


def setup_timezone() -> bool:
    """
    Record the wall-clock timezone in the .env file.

    Returns:
        True if a timezone is configured, False otherwise
    """
    if Config.ENV_FILE.exists():
        with open(Config.ENV_FILE, 'r', encoding='utf-8') as f:
            for line in f:
                if line.startswith('TIMEZONE='):
                    print("✓ Existing timezone setting detected.")
                    return True

    tz = input(f"Enter Timezone (default {Config.TARGET_TIMEZONE}): ").strip() or Config.TARGET_TIMEZONE

    try:
        current_content = Config.ENV_FILE.read_text(encoding='utf-8') if Config.ENV_FILE.exists() else ""
        new_content = current_content.strip() + f"\nTIMEZONE={tz}\n"
        Config.ENV_FILE.write_text(new_content.lstrip(), encoding='utf-8')
        print(f"Timezone saved: {tz}")
        return True
    except OSError as e:
        print(f"Failed to save timezone: {e}")
        return False


def register_user(users: SQLiteUserDirectory) -> None:
    """Ask for a display name and register a user."""
    name = input("Display name for the first user (leave empty to skip): ").strip()
    if not name:
        print("No user registered.")
        return

    email = input("Email (optional): ").strip() or None
    user = users.add_user(name, email)
    print(f"Registered user {user.display_name} with id {user.id}")


def main() -> int:
    """Main setup wizard."""
    print("Setting up the Availability Engine...")
    print("="*60)

    # Step 1: Timezone
    print("\nStep 1: Timezone")
    if not setup_timezone():
        print("Timezone setup skipped.")

    # Step 2: Database
    print("\nStep 2: Database Setup")
    try:
        _, users = ServiceFactory.create_services()
    except Exception as e:
        logger.error(f"Database creation failed: {e}", exc_info=True)
        return 1
    print(f"Database schema checked at {Config.DB_PATH}")

    # Step 3: First user
    print("\nStep 3: Users")
    register_user(users)

    # Final verification
    print("\nStep 4: Verification")
    if Config.validate():
        logger.info("Setup completed successfully")
        print("="*60)
        print("Setup complete!")
        print("="*60)
        print("\nYou can now run: python scripts/show_calendar.py <user_id> today")
        return 0

    print("="*60)
    print("Setup completed with some warnings")
    print("="*60)
    print("\nPlease check the logs and fix any missing configuration")
    return 1


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nSetup cancelled.")
        sys.exit(1)

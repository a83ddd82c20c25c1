# __main__.py
""""" Entry point for the Pocket Calculator (`python -m pocketcalc` or the `pocketcalc` script).

   Responsibilities:
   - Detect run mode (script vs PyInstaller .exe)
   - Verify required files exist in development mode
   - Configure logging from the settings and start the Qt GUI

"""""
import logging
import sys
from pathlib import Path

from pocketcalc import config_manager

logger = logging.getLogger("pocketcalc")


# Resolve package directory depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PACKAGE_DIR = Path(sys._MEIPASS) / "pocketcalc"
else:
    PACKAGE_DIR = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler and the check is skipped.
    """

    REQUIRED = [
        PACKAGE_DIR / "UI.py",
        PACKAGE_DIR / "MathEngine.py",
        PACKAGE_DIR / "ExpressionBuffer.py",
        PACKAGE_DIR / "Formatter.py",
        PACKAGE_DIR / "config_manager.py",
        PACKAGE_DIR / "config.json",
        PACKAGE_DIR / "ui_strings.json",
    ]

    missing_files = [file_path.name for file_path in REQUIRED if not file_path.exists()]

    if missing_files:
        logger.error("The following files are missing or in the wrong location: %s", ", ".join(missing_files))
        sys.exit(1)


def configure_logging(settings):
    level = logging.DEBUG if settings.get("debug") else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main():

    """
    Load configuration and start the GUI.
    - Keep this thin: no business logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    configure_logging(all_settings)
    logger.info("Config loaded: %s", all_settings)

    is_running_as_exe = getattr(sys, 'frozen', False)
    if not is_running_as_exe:
        logger.debug("Developer Mode: Checking file paths...")
        check_files_exist()

    # The UI owns the event loop; imported late so the engine works without Qt installed
    from pocketcalc import UI
    UI.main()


if __name__ == "__main__":
    main()

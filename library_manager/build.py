#!/usr/bin/env python3
"""
Build orchestrator for the Library Manager
Creates the schema and optionally inserts debug data
"""

from library_manager import create_app, db
from library_manager.utils.logger import get_logger

logger = get_logger("library_manager.build")


def build_models():
    """Create every registered table"""
    logger.info("Building catalog and circulation models")
    db.create_all()
    logger.info("All database tables created")


def build_database(enable_debug_data=True, build_only=False, app=None):
    """
    Main build orchestrator for the Library Manager

    Args:
        enable_debug_data (bool): Whether to insert debug data (default: True)
        build_only (bool): Create tables only, never insert data
        app: Flask app to build against (a new one is created when omitted)
    """
    app = app or create_app()

    with app.app_context():
        logger.info(f"Starting database build - debug data: {enable_debug_data}, build only: {build_only}")

        build_models()

        if enable_debug_data and not build_only:
            try:
                from library_manager.debug.add_circulation_debugging_data import insert_circulation_debug_data
                logger.info("Inserting debug data...")
                insert_circulation_debug_data()
            except Exception as e:
                logger.error(f"Debug data insertion failed: {e}")
                raise

        logger.info("Database build completed successfully")


if __name__ == '__main__':
    import sys

    build_database(build_only='--build-only' in sys.argv)

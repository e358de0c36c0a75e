"""
Routes package for the Library Manager
"""

from library_manager.utils.logger import get_logger

logger = get_logger("library_manager.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .catalog import catalog_bp
    app.register_blueprint(catalog_bp, url_prefix='/catalog')

    logger.info("Registered catalog blueprint")

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv
from pathlib import Path
import os
from library_manager.utils.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
csrf = CSRFProtect()

BASE_DIR = Path(__file__).parent.parent
SQLITE_PREFIX = 'sqlite:///'


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def resolve_database_url(url, base_dir=BASE_DIR):
    """
    Make a SQLite URL usable before the first connection.

    Relative SQLite paths are anchored at the project root (not Flask's
    instance path) and the parent directory of the database file is created.
    Other URLs are returned unchanged.
    """
    if not url.startswith(SQLITE_PREFIX):
        return url

    raw_path = url[len(SQLITE_PREFIX):]
    if not raw_path or raw_path == ':memory:':
        return url

    db_path = Path(raw_path)
    if not db_path.is_absolute():
        db_path = Path(base_dir) / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"{SQLITE_PREFIX}{db_path.resolve()}"


def create_app(test_config=None):
    # Load environment variables from .env file (never overrides real env vars)
    load_dotenv()

    app = Flask(__name__)

    logger = get_logger("library_manager")
    logger.info("Initializing Flask application")

    # Configuration
    # SECURITY: Require SECRET_KEY in environment - no fallback
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')
    if test_config and test_config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = test_config['SECRET_KEY']
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    # Prefer an explicit DATABASE_URL env var; otherwise keep the SQLite
    # database inside the project's `instance/` directory.
    db_env = os.environ.get('DATABASE_URL') or f"{SQLITE_PREFIX}instance/library.db"
    app.config['SQLALCHEMY_DATABASE_URI'] = resolve_database_url(db_env)

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Circulation rules
    loan_days = int(os.environ.get('LOAN_PERIOD_DAYS', '30'))  # Default: 30 days
    if loan_days < 1:
        logger.critical(f"LOAN_PERIOD_DAYS must be at least 1, got {loan_days}")
        raise RuntimeError("LOAN_PERIOD_DAYS must be a positive number of days")
    app.config['LOAN_PERIOD_DAYS'] = loan_days

    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'  # CSRF protection
    app.config['SESSION_COOKIE_SECURE'] = _env_flag('SESSION_COOKIE_SECURE', 'True')

    if test_config:
        app.config.update(test_config)

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from library_manager.data.core.library_branch import LibraryBranch
    from library_manager.data.core.asset_info.library_asset import LibraryAsset, Book, Video
    from library_manager.data.core.patron_info.library_card import LibraryCard
    from library_manager.data.core.patron_info.patron import Patron
    from library_manager.data.circulation.checkout import Checkout
    from library_manager.data.circulation.checkout_history import CheckoutHistory
    from library_manager.data.circulation.hold import Hold

    logger.debug("Models imported and registered")

    # Register blueprints
    from library_manager.presentation.routes import init_app as init_routes
    init_routes(app)

    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        # Prevent clickjacking
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'

        # Prevent MIME-sniffing
        response.headers['X-Content-Type-Options'] = 'nosniff'

        return response

    logger.info("Flask application initialization complete")

    return app

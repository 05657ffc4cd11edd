from flask import Flask
import atexit
import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure
from typing import Optional

# Initialize these at module level
mongo_client: Optional[MongoClient] = None
db = None


def init_db(app) -> bool:
    """Initialize database connection with proper error handling"""
    global mongo_client, db
    try:
        if not app.config.get('MONGO_URI'):
            app.logger.error("MONGO_URI configuration is missing")
            return False

        mongo_client = MongoClient(app.config['MONGO_URI'], serverSelectionTimeoutMS=5000)
        # Test the connection explicitly
        mongo_client.admin.command('ping')
        db = mongo_client.get_database(app.config['MONGO_DB_NAME'])
        app.logger.info("Successfully connected to MongoDB")
        return True

    except ConnectionFailure as e:
        app.logger.error(f"Failed to connect to MongoDB: {e}")
        return False


def create_app(config_object, database=None):
    """Create and configure the Flask application.

    ``database`` replaces the MongoDB connection, e.g. with a mongomock database.
    """
    global db
    app = Flask(__name__)

    # Configure logging first
    logging.basicConfig(level=logging.INFO)
    app.logger.setLevel(logging.INFO)

    app.config.from_object(config_object)
    if hasattr(config_object, 'validate'):
        config_object.validate()

    if database is not None:
        db = database
    elif not init_db(app):
        raise RuntimeError("Failed to initialize database")

    from .routes.main import main_bp, news_bp, init_route_dependencies
    app.register_blueprint(main_bp)
    app.register_blueprint(news_bp)

    # Initialize route dependencies within app context
    with app.app_context():
        init_route_dependencies(app, db)

    @app.route('/')
    def index():
        return "News Parser Backend is running!"

    return app


# Clean up resources when the application exits
def cleanup():
    global mongo_client
    if mongo_client is not None:
        try:
            mongo_client.close()
        except Exception as e:
            logging.error(f"Error closing MongoDB connection: {e}")


atexit.register(cleanup)

__all__ = ['db', 'create_app']

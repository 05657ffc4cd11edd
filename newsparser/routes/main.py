from datetime import datetime, timezone
from flask import Blueprint, request, jsonify, current_app
from pydantic import ValidationError
from typing import Optional

from ..errors import Conflict, IngestionFailed, InvalidPeriod, NotFound
from ..models.article import Article
from ..repositories.article_repository import MongoArticleRepository
from ..services.article_service import ArticleService
from ..services.period_resolver import PeriodResolver
from ..tasks.fetcher import FeedClientConfig, NewsFeedClient
from ..tasks.ingestion import IngestionPipeline

# Initialize the blueprints
main_bp = Blueprint('main', __name__)
news_bp = Blueprint('news', __name__, url_prefix='/api/news')

# Initialize variables that will be set up during init_route_dependencies
article_service: Optional[ArticleService] = None
period_resolver: Optional[PeriodResolver] = None
ingestion_pipeline: Optional[IngestionPipeline] = None
db: Optional[object] = None  # pymongo.database.Database


def build_ingestion_pipeline(app, database) -> IngestionPipeline:
    """Wire the feed client and repository from the application config."""
    feed_client = NewsFeedClient(FeedClientConfig.from_app_config(app.config))
    return IngestionPipeline(
        feed_client,
        MongoArticleRepository(database),
        dedupe_within_batch=app.config.get('INGEST_DEDUPE_WITHIN_BATCH', False),
    )


def init_route_dependencies(app, database):
    """Initialize dependencies after app context is created"""
    global article_service, period_resolver, ingestion_pipeline, db

    if database is None:
        app.logger.error("Database connection not initialized")
        raise RuntimeError("Database connection not initialized")

    db = database
    repository = MongoArticleRepository(db)
    article_service = ArticleService(repository)
    period_resolver = PeriodResolver(repository)
    ingestion_pipeline = build_ingestion_pipeline(app, db)


@main_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        if db is None:
            raise RuntimeError("Database not initialized")
        db.command('ping')
        mongo_status = "connected"
    except Exception as e:
        mongo_status = f"disconnected: {e}"

    news_api_key_status = "present" if current_app.config.get('NEWS_API_KEY') else "missing"

    return jsonify({
        "status": "ok",
        "message": "News Parser Backend is healthy!",
        "dependencies": {
            "mongodb": mongo_status,
            "news_api_key": news_api_key_status
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }), 200


@news_bp.route('', methods=['GET'])
def get_all_news():
    articles = article_service.get_all_articles()
    return jsonify([a.to_json() for a in articles]), 200


@news_bp.route('', methods=['POST'])
def save_news():
    """
    Create or replace one article.
    Expects JSON body: {"headline": "...", "description": "...", "publicationTime": "..."}
    """
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Request must be JSON"}), 400

    try:
        article = Article.model_validate(data)
    except ValidationError as e:
        return jsonify({"error": "Invalid article", "details": e.errors(include_url=False, include_context=False)}), 400

    try:
        saved = ingestion_pipeline.save_single(article)
    except Conflict as e:
        return jsonify({"error": str(e), "existing_id": e.existing_id}), 409
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(saved.to_json()), 200 if article.id else 201


@news_bp.route('/<article_id>', methods=['GET'])
def get_news_by_id(article_id):
    try:
        article = article_service.get_article_by_id(article_id)
    except NotFound:
        return jsonify({"error": "News not found"}), 404
    return jsonify(article.to_json()), 200


@news_bp.route('/by-period', methods=['GET'])
def get_news_by_period():
    """
    Articles for a time-of-day period of today, or of yesterday when nothing
    has been ingested today.
    Query parameters: period (morning, day or evening)
    """
    period = request.args.get('period', type=str)
    if not period:
        return jsonify({"error": "Query parameter 'period' is required."}), 400

    try:
        articles = period_resolver.resolve(period)
    except InvalidPeriod as e:
        return jsonify({"error": str(e)}), 400
    return jsonify([a.to_json() for a in articles]), 200


@news_bp.route('/<article_id>', methods=['DELETE'])
def delete_news_by_id(article_id):
    article_service.delete_article(article_id)
    return '', 204


@news_bp.route('/external', methods=['GET', 'POST'])
def fetch_and_save_external_news():
    """
    Fetch top headlines now and return the articles that were persisted.
    """
    try:
        saved = ingestion_pipeline.run_ingestion()
    except IngestionFailed as e:
        current_app.logger.error(f"On-demand ingestion failed: {e}")
        return jsonify({"error": "Failed to fetch news from the external API", "details": str(e)}), 502
    return jsonify([a.to_json() for a in saved]), 200

import newsparser
from newsparser import create_app
from newsparser.routes.main import build_ingestion_pipeline
from newsparser.scheduler import start_scheduler
from config import get_config

config = get_config()

app = create_app(config)

# Scheduler setup
if app.config['SCHEDULER_ENABLED']:
    pipeline = build_ingestion_pipeline(app, newsparser.db)
    scheduler = start_scheduler(pipeline, interval_minutes=app.config['FETCH_INTERVAL_MINUTES'])

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000, debug=app.config['FLASK_DEBUG'], use_reloader=False)

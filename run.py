# run.py
import logging
import os

from flask.cli import with_appcontext

from agrimarket import create_app, db, seed_demo_data
from agrimarket.config import config_for_environment
from agrimarket.repositories import get_user_repository, get_product_repository

config_class = config_for_environment()
logging.basicConfig(level=config_class.LOG_LEVEL)

app = create_app(config_class)


@app.cli.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    seed_demo_data(get_user_repository(), get_product_repository())
    print('Database initialized.')


if __name__ == '__main__':
    app.run(debug=config_class.ENVIRONMENT == 'development', host='0.0.0.0', port=int(os.getenv('PORT', '3001')))

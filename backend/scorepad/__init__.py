from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
import logging
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()

DEMO_PLAYERS = [
    ('Anna', 'Schmidt'),
    ('Max', 'Mueller'),
    ('Lisa', 'Bauer'),
]

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    log_level = flask_app.config.get('LOG_LEVEL', 'INFO')
    flask_app.logger.setLevel(log_level)
    logging.getLogger('scorepad').setLevel(log_level)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS', []), expose_headers=['Location'])

    # Import and register blueprints here
    from scorepad.main import main
    flask_app.register_blueprint(main)

    from scorepad.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')

    @click.command('db-reset')
    @click.option('--seed', is_flag=True, help='Insert a few demo players after recreating the tables.')
    def db_reset_command(seed):
        """Drops and recreates the database, optionally seeding demo players."""
        from scorepad.services.players import PlayerDirectoryService
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            if seed:
                service = PlayerDirectoryService.for_session(db.session)
                for first_name, last_name in DEMO_PLAYERS:
                    service.create_player(first_name, last_name)

            print('Database has been reset' + (' and seeded!' if seed else '!'))

    flask_app.cli.add_command(db_reset_command)

    return flask_app

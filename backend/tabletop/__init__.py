import os
import random

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__, static_folder=None)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    static_folder = flask_app.config.get('STATIC_FOLDER') or 'public'
    if not os.path.isabs(static_folder):
        static_folder = os.path.join(os.path.dirname(flask_app.root_path), static_folder)
    flask_app.config['STATIC_FOLDER'] = static_folder

    allowed_origins = flask_app.config.get('CORS_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per application; handlers reach it through current_app
    from tabletop.services.store import SessionStore
    seed = flask_app.config.get('SHUFFLE_SEED')
    flask_app.extensions['session_store'] = SessionStore(
        max_players=int(flask_app.config.get('MAX_PLAYERS', 4)),
        card_count=int(flask_app.config.get('CARD_COUNT', 36)),
        rng=random.Random(seed) if seed is not None else None,
        logger=flask_app.logger,
    )

    from tabletop.broadcast import RoomBroadcaster
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['room_broadcaster'] = RoomBroadcaster(socketio, namespace=namespace)

    from tabletop.main import main
    flask_app.register_blueprint(main)

    from tabletop.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app

import os


def _csv(value):
    items = [v.strip() for v in value.split(',') if v.strip()]
    if items == ['*']:
        return '*'
    return items


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Room capacity and card universe size ("01".."36")
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '4'))
    CARD_COUNT = int(os.environ.get('CARD_COUNT', '36'))
    # Comma separated list, or "*" for any origin
    CORS_ORIGINS = _csv(os.environ.get('CORS_ORIGINS', '*'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Client bundle served at "/" (relative paths resolve against the backend root)
    STATIC_FOLDER = os.environ.get('STATIC_FOLDER', 'public')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Optional: fixed seed for deck shuffles. Unset means system randomness.
    SHUFFLE_SEED = int(os.environ['SHUFFLE_SEED']) if os.environ.get('SHUFFLE_SEED') else None
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))

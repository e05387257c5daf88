import os

from flask import Blueprint, abort, current_app, jsonify, render_template_string, send_from_directory

main = Blueprint('main', __name__)

ROOMS_PAGE = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8">
    <title>Active Rooms</title>
    <style>
      body { background: #0c0c0c; color: #eee; font-family: sans-serif; padding: 20px; }
      h1 { margin-bottom: 1em; }
      ul { list-style: none; padding: 0; }
      li { margin: 0.5em 0; }
      a { color: #4af; text-decoration: none; }
      a:hover { text-decoration: underline; }
    </style>
  </head>
  <body>
    <h1>Active Rooms</h1>
    <ul>
    {% for room in rooms %}
      <li>
        <strong>{{ room.room }}</strong> ({{ room.players }}/{{ room.max_players }})
        {% if room.full %}<em>Full</em>{% else %}<a href="{{ url_for('main.index', room=room.room) }}">Join</a>{% endif %}
      </li>
    {% endfor %}
    </ul>
  </body>
</html>
"""


def _active_rooms():
    store = current_app.extensions['session_store']
    return [
        {
            'room': room_id,
            'players': players,
            'max_players': store.max_players,
            'full': players >= store.max_players,
        }
        for room_id, players in store.rooms()
    ]


@main.route('/')
def index():
    static_folder = current_app.config['STATIC_FOLDER']
    if os.path.isfile(os.path.join(static_folder, 'index.html')):
        return send_from_directory(static_folder, 'index.html')
    return jsonify({'message': 'Welcome to the tabletop server!'})


@main.route('/<path:filename>')
def static_file(filename):
    static_folder = current_app.config['STATIC_FOLDER']
    if not os.path.isdir(static_folder):
        abort(404)
    return send_from_directory(static_folder, filename)


@main.route('/rooms')
def list_rooms():
    return render_template_string(ROOMS_PAGE, rooms=_active_rooms())


@main.route('/api/rooms')
def list_rooms_json():
    return jsonify(_active_rooms())

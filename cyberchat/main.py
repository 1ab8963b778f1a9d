from typing import Any, Dict, Optional, Tuple

from flask import Flask, request, jsonify

from cyberchat.chatbot import ChatbotCore
from cyberchat.config import configure_logging, get_settings


def _read_request() -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Return (body, None) for a JSON object with a usable session id, else (None, error message)."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return None, 'Request body must be a JSON object'

    session_id = data.get('session_id', 'default')
    if not isinstance(session_id, str) or not session_id:
        return None, 'session_id must be a non-empty string'
    return data, None


def create_app(core: Optional[ChatbotCore] = None) -> Flask:
    """Build the HTTP adapter around a chatbot core."""
    app = Flask(__name__)
    chatbot = core or ChatbotCore()
    app.config['CHATBOT'] = chatbot

    # Route for handling incoming messages
    @app.route('/chat', methods=['POST'])
    def chat():
        data, error = _read_request()
        if data is None:
            return jsonify({'error': error}), 400

        message = data.get('message')
        if message is None or not isinstance(message, str):
            return jsonify({'error': 'No message provided'}), 400

        result = chatbot.process_turn(message, session_id=data.get('session_id', 'default'))

        return jsonify({
            'recognized': result.recognized,
            'response': result.response,
            'intent': result.intent,
            'mode': result.mode.value
        })

    @app.route('/user', methods=['POST'])
    def user():
        data, error = _read_request()
        if data is None:
            return jsonify({'error': error}), 400

        name = data.get('name')
        favorite_topic = data.get('favorite_topic')
        if not all(value is None or isinstance(value, str) for value in (name, favorite_topic)):
            return jsonify({'error': 'name and favorite_topic must be strings'}), 400

        session_id = data.get('session_id', 'default')
        chatbot.set_user_details(name, favorite_topic, session_id=session_id)

        profile = chatbot.get_session(session_id).profile
        return jsonify({'name': profile.user_name, 'favorite_topic': profile.favorite_topic})

    @app.route('/reset', methods=['POST'])
    def reset():
        data, error = _read_request()
        if data is None:
            return jsonify({'error': error}), 400

        session_id = data.get('session_id', 'default')
        chatbot.reset(session_id)
        return jsonify({'status': 'reset', 'session_id': session_id})

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok', **chatbot.get_status()})

    return app


if __name__ == '__main__':
    # Load settings and set up logging before the first session exists
    configure_logging(get_settings().logging)

    app = create_app()

    # Start the Flask app
    app.run(debug=False, port=5000)

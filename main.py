"""
WordRally Game Server - Main Entry Point

This is the main entry point for the WordRally game server.
It creates the Flask-SocketIO application and starts serving.
"""

import os
from wordrally import create_app
from wordrally.config import config
from wordrally.utils.game_logger import game_logger


def main():
    """Main function to create the app and start the server."""
    config_class = config.get(os.getenv('WORDRALLY_ENV', 'default'), config['default'])
    try:
        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")
        
        game_logger.logger.info(f"WordRally Server Starting with {config_class.__name__}")
        
        print(f"\nStarting WordRally Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"Score store: {config_class.SCORE_STORE}")
        print("=" * 50)
        
        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)
        
    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("WordRally Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()

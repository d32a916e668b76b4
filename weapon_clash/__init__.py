# weapon_clash/__init__.py
from .routes import clash_bp
from .sockets import register_clash_socket_handlers

def init_clash(app, socketio):
    app.register_blueprint(clash_bp)
    register_clash_socket_handlers(socketio)

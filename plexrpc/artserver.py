import logging
import os
import threading

from flask import Flask, abort, request, send_from_directory
from werkzeug.utils import secure_filename


def create_app(upload_folder, token):
    upload_folder = os.path.abspath(upload_folder)
    os.makedirs(upload_folder, exist_ok=True)
    app = Flask(__name__)

    @app.route("/upload", methods=["POST"])
    def upload_endpoint():
        if not token or request.form.get("token") != token:
            abort(403)
        file = request.files.get("file")
        if not file:
            return "No file", 400
        name = secure_filename(request.form.get("name") or file.filename or "")
        if not name:
            return "Bad file name", 400
        file.save(os.path.join(upload_folder, name))
        return "OK", 200

    @app.route("/art/<path:name>", methods=["GET"])
    def art(name):
        return send_from_directory(upload_folder, name)

    return app


def start_art_server(app, host="127.0.0.1", port=7000):
    logging.getLogger("werkzeug").setLevel(logging.ERROR)  # keep console clean
    thread = threading.Thread(
        target=app.run,
        kwargs={"host": host, "port": port, "debug": False, "use_reloader": False},
        name="art-server",
        daemon=True,
    )
    thread.start()
    return thread

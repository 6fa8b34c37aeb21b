import json
import logging

import flask

from .graph import create_graph, execute as graphql_execute
from .store import create_seeded_store, RecordStore


_logger = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    "HOST": "127.0.0.1",
    "PORT": 3000,
    "SEED_DATA": True,
    "LOG_LEVEL": "INFO",
}


def create_app(config=None, store=None):
    """
    Create the Flask app serving the books graph at ``/graphql``.

    Configuration is read from ``DEFAULT_CONFIG``, then from environment
    variables prefixed with ``BOOKGRAPH_`` (for instance ``BOOKGRAPH_PORT``),
    then from ``config``. Unless a store is passed in, each app gets its own
    store, seeded when ``SEED_DATA`` is set.
    """
    app = flask.Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env(prefix="BOOKGRAPH")
    if config is not None:
        app.config.update(config)

    if store is None:
        store = create_seeded_store() if app.config["SEED_DATA"] else RecordStore()

    app.json.sort_keys = False
    app.extensions["bookgraph.store"] = store

    @app.route("/graphql", methods=["GET", "POST"])
    def graphql():
        if flask.request.method == "POST":
            request = flask.request.get_json(silent=True)
            if not isinstance(request, dict):
                request = {}
            variables = request.get("variables")
        else:
            request = flask.request.args
            try:
                variables = _read_json_arg(request.get("variables"))
            except ValueError:
                return _error_response("Variables are invalid JSON.")

        if variables is not None and not isinstance(variables, dict):
            return _error_response("Variables must be a JSON object.")

        query = request.get("query")
        if not query:
            return _error_response("Must provide query string.")

        result = graphql_execute(
            query,
            graph=create_graph(store=store),
            variables=variables or {},
            operation_name=request.get("operationName"),
            allow_mutations=flask.request.method == "POST",
        )

        status = 200 if result.errors is None else 400
        return flask.jsonify(result.formatted), status

    return app


def _read_json_arg(value):
    if value is None or value == "":
        return None
    else:
        return json.loads(value)


def _error_response(message):
    return flask.jsonify({"errors": [{"message": message}]}), 400


def main():
    app = create_app()
    logging.basicConfig(level=app.config["LOG_LEVEL"])

    _logger.info("The server is running on http://%s:%s/graphql", app.config["HOST"], app.config["PORT"])
    app.run(host=app.config["HOST"], port=app.config["PORT"])


if __name__ == "__main__":
    main()

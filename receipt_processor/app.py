""" Flask HTTP interface for the receipt processor """
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import MethodNotAllowed, NotFound

from receipt_processor.config import get_server_config
from receipt_processor.errors import NotFoundError
from receipt_processor.logging_config import setup_logging
from receipt_processor.models import receipt_from_json
from receipt_processor.service import ReceiptService


def create_app(service: Optional[ReceiptService] = None) -> Flask:
    """ Builds the Flask app around a receipt service, creating an empty one if none is given """
    flask_app = Flask(__name__)
    receipt_service = service if service is not None else ReceiptService()
    flask_app.extensions["receipt_service"] = receipt_service

    @flask_app.route('/receipts/process', methods=['POST'])
    def process_receipt():
        """
        Router for receipt processing requests. The input JSON is validated,
        normalized and scored, then persisted in the application's memory
        under a newly generated id which is returned to the user.

        Returns:
            400 Error if input JSON is invalid
            200 OK and generated receipt id if input JSON is valid
        """
        payload = request.get_json(silent=True)
        try:
            receipt = receipt_from_json(payload)
            receipt_id = receipt_service.process_receipt(receipt)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400  # return appropriate error messages
        else:
            return jsonify({"id": receipt_id})

    @flask_app.route('/receipts/', methods=['GET'])
    def list_receipts():
        """ Router returning every stored receipt, in no particular order """
        return jsonify([receipt.to_json() for receipt in receipt_service.list_receipts()])

    @flask_app.route('/receipts/<receipt_id>', methods=['GET'])
    def get_receipt(receipt_id):
        """
        Router for full receipt lookups.

        Returns:
            404 Error if the receipt id is not found
            200 OK and the normalized receipt with its id and points
        """
        return jsonify(receipt_service.get_receipt(receipt_id).to_json())

    @flask_app.route('/receipts/<receipt_id>/points', methods=['GET'])
    def get_points(receipt_id):
        """
        Router for receipt points requests. The input receipt id is used
        to look up its associated receipt in the application's memory.

        Returns:
            404 Error if the receipt id is not found
            200 OK and the calculated points for the receipt if receipt id is present in memory
        """
        return jsonify({"points": receipt_service.get_points(receipt_id)})  # read the previously computed score

    @flask_app.errorhandler(NotFoundError)
    def handle_receipt_not_found(e):
        return jsonify({"error": str(e)}), 404

    @flask_app.errorhandler(NotFound)
    def handle_unknown_endpoint(e):
        return jsonify({
            "error": "Endpoint not found",
            "message": f"The requested URL {request.path} was not found on this server.",
        }), 404

    @flask_app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(e):
        return jsonify({
            "error": "Method not allowed",
            "message": f"The method {request.method} is not allowed for {request.path}.",
        }), 405

    return flask_app


def main():
    config = get_server_config()
    setup_logging(config.log_level)
    flask_app = create_app()
    # setting threaded=True allows Flask to concurrently handle requests
    flask_app.run(host=config.host, port=config.port, debug=config.debug, threaded=True)


if __name__ == '__main__':
    main()

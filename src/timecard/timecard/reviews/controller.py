from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..remote.codec import encode_review


def register(app: Flask, container: Container) -> None:
    @app.route("/performance", methods=["POST"], endpoint="performance_submit")
    def performance_submit():
        container.review_service.submit(request.get_json(silent=True))
        return jsonify({"message": "Performance review saved"})

    @app.route("/performance/<int:emplid>", methods=["GET"], endpoint="performance_get")
    def performance_get(emplid: int):
        review = container.review_service.get_review(employee_id=emplid, month_key=request.args.get("month"))
        return jsonify(encode_review(review) if review else {})

from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..remote.codec import encode_salary


def register(app: Flask, container: Container) -> None:
    @app.route("/salary/<int:emplid>", methods=["GET"], endpoint="salary_statement")
    def salary_statement(emplid: int):
        statement = container.salary_service.get_statement(employee_id=emplid, month_key=request.args.get("month"))
        return jsonify(encode_salary(statement))

from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..remote.codec import encode_attendance, encode_monthly


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/<int:emplid>/monthly", methods=["GET"], endpoint="attendance_monthly")
    def attendance_monthly(emplid: int):
        data = container.attendance_service.get_monthly(employee_id=emplid, month_key=request.args.get("month"))
        return jsonify(encode_monthly(data))

    @app.route("/attendance/<int:emplid>/daily", methods=["GET"], endpoint="attendance_daily")
    def attendance_daily(emplid: int):
        record = container.attendance_service.get_daily(employee_id=emplid, date_key=request.args.get("date"))
        return jsonify(encode_attendance(record) if record else {})

    @app.route("/attendance", methods=["PUT"], endpoint="attendance_update")
    def attendance_update():
        container.attendance_service.update_attendance(request.get_json(silent=True))
        return jsonify({"message": "Attendance updated"})

    @app.route("/leave", methods=["POST"], endpoint="leave_create")
    def leave_create():
        container.attendance_service.create_leave(request.get_json(silent=True))
        return jsonify({"message": "Leave registered"})

    @app.route("/leave/<int:emplid>", methods=["DELETE"], endpoint="leave_delete")
    def leave_delete(emplid: int):
        deleted = container.attendance_service.delete_leave(employee_id=emplid, date_key=request.args.get("date"))
        return jsonify({"message": "Leave deleted" if deleted else "No leave registered"})

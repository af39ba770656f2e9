from __future__ import annotations

from flask import Flask, request

from ..common.http import error_response, ok, role_required, system_error
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/reports/statistics", methods=["GET"], endpoint="claim_statistics")
    @role_required(Role.HR, Role.MANAGER, Role.COORDINATOR)
    def claim_statistics():
        try:
            return ok(reports.generate_statistics().to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/reports/lecturers/<int:lecturer_id>", methods=["GET"], endpoint="lecturer_performance")
    @role_required(Role.HR, Role.MANAGER)
    def lecturer_performance(lecturer_id: int):
        try:
            return ok(reports.lecturer_performance(lecturer_id).to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/reports/monthly", methods=["GET"], endpoint="monthly_financial_report")
    @role_required(Role.HR, Role.MANAGER)
    def monthly_financial_report():
        try:
            return ok(reports.monthly_financial(request.args.get("month", "")).to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/reports/annual/<int:year>", methods=["GET"], endpoint="annual_report")
    @role_required(Role.HR)
    def annual_report(year: int):
        try:
            summary = reports.annual_summary(year)
            return ok(summary.to_dict(), f"Annual report for {summary.year}")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error generating annual report")

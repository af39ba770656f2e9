from __future__ import annotations

from flask import Flask

from ..common.http import current_role, error_response, ok, payload, role_required, system_error
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.lecturer_service

    @app.route("/lecturers", methods=["GET"], endpoint="list_lecturers")
    @role_required(Role.HR, Role.COORDINATOR, Role.MANAGER)
    def list_lecturers():
        try:
            return ok([lec.to_dict() for lec in service.list_lecturers()])
        except DomainError as e:
            return error_response(e)

    @app.route("/lecturers", methods=["POST"], endpoint="add_lecturer")
    @role_required(Role.HR)
    def add_lecturer():
        try:
            data = payload()
            lecturer_id = service.add_lecturer(
                current_role=current_role(),
                full_name=data.get("full_name", ""),
                email=data.get("email", ""),
                module_name=data.get("module_name", ""),
                hourly_rate=data.get("hourly_rate"),
            )
            return ok(service.get_lecturer(lecturer_id).to_dict(), "Lecturer added", status=201)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error adding lecturer.")

    @app.route("/lecturers/<int:lecturer_id>", methods=["PUT"], endpoint="update_lecturer")
    @role_required(Role.HR)
    def update_lecturer(lecturer_id: int):
        try:
            data = payload()
            lecturer = service.update_lecturer(
                current_role=current_role(),
                lecturer_id=lecturer_id,
                full_name=data.get("full_name"),
                email=data.get("email"),
                module_name=data.get("module_name"),
                hourly_rate=data.get("hourly_rate"),
            )
            return ok(lecturer.to_dict(), f"Lecturer {lecturer.full_name} updated")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error updating lecturer information.")

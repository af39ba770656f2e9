from __future__ import annotations

from flask import Flask

from ..common.http import (
    current_lecturer_id,
    current_role,
    error_response,
    ok,
    payload,
    role_required,
    system_error,
)
from ..core.enums import Role
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.claim_service
    automation = container.automation_service

    def _require_lecturer_id() -> int:
        lecturer_id = current_lecturer_id()
        if lecturer_id is None:
            raise ValidationError("Unable to identify lecturer. Please log in again.")
        return lecturer_id

    @app.route("/claims", methods=["POST"], endpoint="submit_claim")
    @role_required(Role.LECTURER)
    def submit_claim():
        try:
            data = payload()
            result = service.submit_claim(
                current_role=current_role(),
                lecturer_id=_require_lecturer_id(),
                module_name=data.get("module_name", ""),
                month=data.get("month", ""),
                hours_worked=data.get("hours_worked"),
                supporting_document=data.get("supporting_document"),
            )
            claim = service.get_claim(result.claim_id)
            body = {
                "claim": claim.to_dict(),
                "validation": result.validation.to_dict() if result.validation else None,
            }
            return ok(body, "Claim submitted successfully", status=201)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("System error while submitting claim")

    @app.route("/claims/mine", methods=["GET"], endpoint="my_claims")
    @role_required(Role.LECTURER)
    def my_claims():
        try:
            claims = service.list_for_lecturer(_require_lecturer_id())
            return ok([c.to_dict() for c in claims])
        except DomainError as e:
            return error_response(e)

    @app.route("/claims/attention", methods=["GET"], endpoint="claims_requiring_attention")
    def claims_requiring_attention():
        try:
            claims = container.report_service.claims_requiring_attention(current_role())
            return ok([c.to_dict() for c in claims])
        except DomainError as e:
            return error_response(e)

    @app.route("/claims/<int:claim_id>", methods=["GET"], endpoint="claim_details")
    @role_required(Role.LECTURER, Role.COORDINATOR, Role.MANAGER, Role.HR)
    def claim_details(claim_id: int):
        try:
            claim = service.get_claim(claim_id)
            if current_role() == Role.LECTURER and claim.lecturer_id != current_lecturer_id():
                raise NotFoundError(f"Claim #{claim_id} not found")
            return ok(claim.to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/claims/<int:claim_id>/approve", methods=["POST"], endpoint="approve_claim")
    @role_required(Role.COORDINATOR)
    def approve_claim(claim_id: int):
        try:
            claim = service.approve(current_role=current_role(), claim_id=claim_id)
            return ok(claim.to_dict(), f"Claim #{claim.claim_id} has been approved.")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error approving claim. Please try again.")

    @app.route("/claims/<int:claim_id>/verify", methods=["POST"], endpoint="verify_claim")
    @role_required(Role.MANAGER)
    def verify_claim(claim_id: int):
        try:
            claim = service.verify(current_role=current_role(), claim_id=claim_id)
            return ok(claim.to_dict(), f"Claim #{claim.claim_id} has been verified and approved for payment.")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error verifying claim. Please try again.")

    @app.route("/claims/<int:claim_id>/reject", methods=["POST"], endpoint="reject_claim")
    @role_required(Role.COORDINATOR, Role.MANAGER)
    def reject_claim(claim_id: int):
        try:
            claim = service.reject(
                current_role=current_role(),
                claim_id=claim_id,
                reason=payload().get("reason", ""),
            )
            return ok(claim.to_dict(), f"Claim #{claim.claim_id} has been rejected.")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error rejecting claim. Please try again.")

    @app.route("/claims/<int:claim_id>", methods=["DELETE"], endpoint="delete_claim")
    @role_required(Role.LECTURER, Role.COORDINATOR, Role.MANAGER)
    def delete_claim(claim_id: int):
        try:
            service.delete(current_role=current_role(), claim_id=claim_id, lecturer_id=current_lecturer_id())
            return ok(message=f"Claim #{claim_id} has been deleted successfully.")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error deleting claim. Please try again.")

    @app.route("/claims/<int:claim_id>/validation", methods=["GET"], endpoint="validate_claim")
    @role_required(Role.COORDINATOR, Role.MANAGER, Role.HR)
    def validate_claim(claim_id: int):
        try:
            result = automation.validate(service.get_claim(claim_id))
            return ok(result.to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/claims/<int:claim_id>/auto-verify", methods=["POST"], endpoint="auto_verify_claim")
    @role_required(Role.COORDINATOR)
    def auto_verify_claim(claim_id: int):
        try:
            result = automation.auto_verify(claim_id)
            return ok(result.to_dict(), result.action_taken or "No automatic action taken")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error during automatic verification")

    @app.route("/payments/batch", methods=["POST"], endpoint="process_batch_payment")
    @role_required(Role.HR)
    def process_batch_payment():
        try:
            result = service.process_batch_payment(current_role=current_role(), month=payload().get("month", ""))
            return ok(
                result.to_dict(),
                f"Batch payment processed for {len(result.claim_ids)} claims for {result.month}.",
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return system_error("Error processing batch payment.")

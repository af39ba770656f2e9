"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the workflow rules live in the services.
"""

import importlib

from config import get_settings_module

from src.claims_system.claims_system.container import build_container
from src.claims_system.claims_system.core.enums import Role
from src.claims_system.claims_system.core.logging import configure_logging


def main():
    settings = importlib.import_module(get_settings_module())
    configure_logging(level="INFO")
    container = build_container(db_config=settings.DB_CONFIG)

    for claim in container.report_service.claims_requiring_attention(Role.COORDINATOR):
        result = container.automation_service.auto_verify(claim.claim_id)
        print(claim.claim_id, result.action_taken or "left for manual review")

    print(container.report_service.generate_statistics().to_dict())


if __name__ == "__main__":
    main()

from __future__ import annotations

from s3_importer.models.service import AccountConfig


def apply_name_template(template: str, account_config: AccountConfig) -> str:
    """Fill `<account_id>` and `<region>` placeholders in a resource name."""

    return template.replace("<account_id>", account_config.account_id).replace("<region>", account_config.region)

from typing import Dict

from fastapi import Request

# ---------------- Input ----------------
from bq_forward.adapters.model_adapter import ModelAdapter

# ---------------- Validation ----------------
from bq_forward.pipeline.model_validator import ModelValidator

# ---------------- Outputs ----------------
from bq_forward.outputs.bigquery_ddl import BigQueryDDLGenerator

# ---------------- Observability ----------------
from bq_forward.observability.logger import log_event, generate_request_id, RequestTimer
from bq_forward.observability.identity import extract_user_identity

OUTPUT_SCRIPT = "SCRIPT"
OUTPUT_STATEMENTS = "STATEMENTS"


# ==========================================================
# ROUTER
# ==========================================================
def route(payload: Dict, request: Request) -> Dict:
    """
    Generator main entry point.

    Flow:
    Model document → Canonical (hydration) → Validation → DDL
    """

    request_id = generate_request_id()
    user_id = extract_user_identity(request.headers, payload)
    timer = RequestTimer()

    log_event("DDL_GENERATION_STARTED", {
        "request_id": request_id,
        "user_id": user_id,
    })

    try:
        output_type = (payload.get("output") or OUTPUT_SCRIPT).upper()
        if output_type not in {OUTPUT_SCRIPT, OUTPUT_STATEMENTS}:
            raise ValueError(f"Invalid output: {output_type}")

        strict = payload.get("strict") is True

        # --------------------------------------------------
        # Phase 1 – Hydration
        # --------------------------------------------------
        database, tables = ModelAdapter(payload.get("model")).parse()

        # --------------------------------------------------
        # Phase 2 – Validation (advisory unless strict)
        # --------------------------------------------------
        validator = ModelValidator(database, tables)
        issues = validator.raise_for_errors() if strict else validator.validate()

        for issue in issues:
            log_event("MODEL_VALIDATION_WARNING", {"request_id": request_id, **issue})

        # --------------------------------------------------
        # Phase 3 – DDL
        # --------------------------------------------------
        ddl = BigQueryDDLGenerator().generate(database, tables)

    except Exception as e:
        log_event("DDL_GENERATION_FAILED", {
            "request_id": request_id,
            "user_id": user_id,
            "error_type": type(e).__name__,
            "error": str(e),
            "duration_seconds": timer.duration(),
        })
        raise

    log_event("DDL_GENERATION_COMPLETED", {
        "request_id": request_id,
        "user_id": user_id,
        "dataset": database.database_name if database else None,
        "tables": [table.name for table in tables],
        "issues": len(issues),
        "duration_seconds": timer.duration(),
    })

    response = {
        "status": "SUCCESS",
        "request_id": request_id,
        "dataset": database.database_name if database else None,
        "tables": [table.name for table in tables],
        "issues": issues,
        "script": ddl["script"],
    }

    if output_type == OUTPUT_STATEMENTS:
        response["ddl"] = {
            "database_ddl": ddl["database_ddl"],
            "table_ddls": ddl["table_ddls"],
        }

    return response

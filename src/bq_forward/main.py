from fastapi import FastAPI, HTTPException, Request

from bq_forward.router import route
from bq_forward.utils.exceptions import ModelHydrationError, ModelValidationError

app = FastAPI(
    title="BigQuery Forward Engineering",
    version="1.0.0"
)


@app.post("/generate-ddl")
def generate_ddl(payload: dict, request: Request):
    try:
        return route(payload, request)
    except ModelValidationError as e:
        # Strict validation failure → client error, not server crash
        raise HTTPException(
            status_code=422,
            detail={
                "status": "ERROR",
                "message": str(e),
                "issues": e.issues,
            }
        )
    except (ModelHydrationError, ValueError) as e:
        raise HTTPException(
            status_code=400,
            detail={
                "status": "ERROR",
                "message": str(e),
            }
        )

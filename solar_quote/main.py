import logging
import traceback

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from solar_quote.models import (
    Alert,
    BomPreviewRequest,
    BomPreviewResponse,
    QuotationRequest,
    QuotationTemplate,
)
from solar_quote.services.bom_service import generate_bill_of_materials
from solar_quote.services.export_service import bom_to_csv
from solar_quote.services.quotation_service import generate_quotation_template
from solar_quote.services.variants import require_project_configuration
from solar_quote.settings import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="1.0", debug=settings.debug)


def _parse_project(payload):
    try:
        return require_project_configuration(payload)
    except ValidationError as e:
        # Bad field values inside the free-form project payload
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


def _internal_error(e):
    error_msg = traceback.format_exc()
    _logger.error(error_msg)
    detail = f"Internal error: {e}"
    if settings.debug:
        detail += f" | Trace: {error_msg}"
    return HTTPException(status_code=500, detail=detail)


@app.get("/api/v1/health")
async def health():
    return {"status": "ok", "environment": settings.environment}


@app.post("/api/v1/quotations/preview-bom", response_model=BomPreviewResponse, response_model_by_alias=True)
async def preview_bom(request: BomPreviewRequest):
    alerts = []

    try:
        project = _parse_project(request.project)
        bill_of_materials = generate_bill_of_materials(project, alerts)

        return BomPreviewResponse(
            bill_of_materials=bill_of_materials,
            alerts=[Alert(**alert) for alert in alerts],
        )

    except HTTPException:
        raise
    except ValueError as e:
        # Unknown projectType and other rejected inputs
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise _internal_error(e)


@app.post("/api/v1/quotations/template", response_model=QuotationTemplate, response_model_by_alias=True)
async def quotation_template(request: QuotationRequest):
    try:
        project = _parse_project(request.project)
        return generate_quotation_template(
            project,
            request.customer,
            request.quotation,
            quotation_date=request.quotation_date,
        )

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise _internal_error(e)


@app.post("/api/v1/quotations/bom.csv", response_class=PlainTextResponse)
async def bom_csv(request: BomPreviewRequest):
    try:
        project = _parse_project(request.project)
        csv_text = bom_to_csv(generate_bill_of_materials(project))
        return PlainTextResponse(csv_text, media_type="text/csv")

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise _internal_error(e)

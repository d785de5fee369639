"""
HTTP API for the ticket extraction engine.

    POST /extract      JSON {"text": ..., "meta": {...}} -> record
    POST /extract-pdf  raw PDF bytes as the request body -> record
    GET  /health
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from .exceptions import TicketInputError
from .extraction.shared_utils.diagnostics import MemorySink
from .orchestration.ticket_extractor import get_ticket_extractor

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title="Ticket Extraction API",
    description="Extracts structured records from railway ticket text and PDFs.",
    version=VERSION
)


class ExtractionRequest(BaseModel):
    text: str = Field(..., description="Reconstructed ticket text in reading order")
    meta: Optional[Dict[str, Any]] = Field(None, description="Metadata attached to the record unchanged")


def _response(record, sink: MemorySink) -> Dict[str, Any]:
    response = record.to_dict()
    response['_diagnostics'] = [
        {'level': event.level, 'message': event.message} for event in sink.events
    ]
    return response


@app.post("/extract", response_model=Dict[str, Any])
async def extract_ticket(request: ExtractionRequest):
    """Extract a ticket record from already reconstructed text."""
    sink = MemorySink()
    record = get_ticket_extractor().extract(request.text, meta=request.meta, sink=sink)
    return _response(record, sink)


@app.post("/extract-pdf", response_model=Dict[str, Any])
async def extract_ticket_pdf(request: Request):
    """Extract a ticket record from a PDF sent as the raw request body."""
    pdf_bytes = await request.body()
    if not pdf_bytes:
        raise HTTPException(status_code=400, detail="Empty request body")

    sink = MemorySink()
    try:
        record = get_ticket_extractor().extract_from_pdf(pdf_bytes, sink=sink)
    except TicketInputError as e:
        logger.error(f"PDF extraction failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return _response(record, sink)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "ticket-extraction-api", "version": VERSION}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    uvicorn.run("ticket.api:app", host="0.0.0.0", port=8000, reload=False)

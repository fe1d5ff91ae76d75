from typing import Optional

from fastapi.responses import JSONResponse, Response

ALLOWED_HEADERS = [
    "authorization",
    "x-client-info",
    "apikey",
    "content-type",
    "x-supabase-client-platform",
    "x-supabase-client-platform-version",
    "x-supabase-client-runtime",
    "x-supabase-client-runtime-version",
]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
}


def preflight_response() -> Response:
    return Response(status_code=200, headers=dict(CORS_HEADERS))


def function_response(body: dict, status_code: int = 200, headers: Optional[dict] = None) -> JSONResponse:
    """JSON answer of a server function; every response carries the CORS headers"""
    return JSONResponse(content=body, status_code=status_code, headers={**CORS_HEADERS, **(headers or {})})

from datetime import datetime, timezone

from fastapi.responses import JSONResponse


def json_attachment(collection: str, records: list[dict]) -> JSONResponse:
    """Wrap backup records as a downloadable JSON file."""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return JSONResponse(
        content=records,
        headers={"Content-Disposition": f'attachment; filename="{collection}-backup-{stamp}.json"'},
    )

from typing import Any, Dict

from fastapi import FastAPI, Body
from fastapi.responses import JSONResponse

from api.shabbat_times import build_shabbat_times_from_payload
from hebcal_api import LocationLookupError
from locations import suggest_locations


app = FastAPI()


@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.post("/api/shabbat-times")
def get_shabbat_times(payload: Dict[str, Any] = Body(default={})):
    """
    Compare this week's Shabbat times across locations.

    Payload example:
    {
      "homeLocation": "San Juan, Puerto Rico",
      "locations": ["London", "10001"]
    }

    Every additional location's times are also expressed in the home
    location's timezone, and the summary names the earliest candle lighting
    and latest Havdalah across all locations.
    """
    if payload is None:
        payload = {}

    try:
        return build_shabbat_times_from_payload(payload)
    except (ValueError, LocationLookupError) as e:
        print(f"Error fetching Shabbat times: {e}")
        return JSONResponse(status_code=400, content={"message": str(e)})
    except Exception as e:
        print(f"Error fetching Shabbat times: {e}")
        return JSONResponse(status_code=500, content={"message": f"Failed to fetch Shabbat times: {e}"})


@app.get("/api/locations/suggest")
async def get_location_suggestions(q: str = ""):
    """Autocomplete suggestions for a partially typed location."""
    return {"suggestions": suggest_locations(q)}

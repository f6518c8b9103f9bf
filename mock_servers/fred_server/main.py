from fastapi import FastAPI, HTTPException, Query

app = FastAPI(title="Mock FRED Server", version="1.0.0")

# Latest observation per series; an empty list mimics a series with no data
OBSERVATIONS = {
    "DPRIME": [{"date": "2025-06-02", "value": "7.50"}],
    "MORTGAGE30US": [{"date": "2025-05-29", "value": "6.89"}],
    "MORTGAGE15US": [{"date": "2025-05-29", "value": "6.03"}],
    "EMPTYSERIES": [],
    "MISSINGVALUE": [{"date": "2025-05-29", "value": "."}],
}

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/fred/series/observations")
def get_observations(series_id: str, api_key: str = "", file_type: str = "json", limit: int = Query(1, ge=1), sort_order: str = "desc"):
    if not api_key:
        raise HTTPException(status_code=400, detail="api_key is not set")
    if series_id not in OBSERVATIONS:
        raise HTTPException(status_code=404, detail="series does not exist")
    observations = OBSERVATIONS[series_id]
    if sort_order == "asc":
        observations = list(reversed(observations))
    return {"observations": observations[:limit]}

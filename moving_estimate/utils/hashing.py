import hashlib, json
from moving_estimate.schemas.estimate import QuoteRequest

def quote_cache_key(req: QuoteRequest) -> str:
    s = json.dumps(req.model_dump(mode="json"), sort_keys=True)
    return f"quote:{hashlib.sha256(s.encode()).hexdigest()}"

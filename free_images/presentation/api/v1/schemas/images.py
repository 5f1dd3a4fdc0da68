from typing import Any, Dict, List

from pydantic import BaseModel


class SearchResponse(BaseModel):
    list: List[Dict[str, Any]]

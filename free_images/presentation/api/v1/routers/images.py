import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query

from free_images.application.use_cases.repository import FreeImagesRepository
from free_images.core.schemas import Listing, LoginForm
from free_images.presentation.api.v1.dependencies.images import get_repository
from free_images.presentation.api.v1.schemas.images import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images")


@router.get("", response_model=Union[LoginForm, Listing])
def get_listing(
    keyword: str = Query("", alias="free_images_keyword"),
    s: str = "",
    page: str = "",
    last_keyword: Optional[str] = None,
    maxwidth: str = Query("", alias="free_images_maxwidth"),
    maxheight: str = Query("", alias="free_images_maxheight"),
    repository: FreeImagesRepository = Depends(get_repository),
):
    """List one page of images, or return the search form when there is no keyword.

    Callers keep the returned keyword themselves and send it back as
    ``last_keyword`` when requesting further pages.
    """
    state = repository.check_login(
        keyword=keyword, s=s, page=page, last_keyword=last_keyword
    )
    if not state.authenticated:
        return repository.print_login(ajax=True)
    return repository.get_listing(state.keyword, page, maxwidth, maxheight)


@router.get("/search", response_model=SearchResponse)
def search(
    q: str = Query(..., min_length=1),
    page: int = Query(0, ge=0),
    repository: FreeImagesRepository = Depends(get_repository),
):
    """Search without touching the stored size preferences."""
    return repository.search(q, page)


@router.get("/login-form", response_model=LoginForm)
def login_form(repository: FreeImagesRepository = Depends(get_repository)):
    return repository.print_login(ajax=True)

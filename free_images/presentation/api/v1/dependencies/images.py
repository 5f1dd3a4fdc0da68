from free_images.application.use_cases.repository import FreeImagesRepository
from free_images.infrastructure.adapters.bundles.image_search import (
    get_repository_adapter_bundle,
)


def get_repository() -> FreeImagesRepository:
    """Compose the FreeImagesRepository at Presentation layer using adapter providers."""
    adapters = get_repository_adapter_bundle()
    return FreeImagesRepository(adapters.image_search, adapters.preferences)

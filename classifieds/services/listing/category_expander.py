import logging

from classifieds.services.listing.listing_store import ListingStore

logger = logging.getLogger(__name__)


class CategoryExpander:
    """
    Resolves a category to the set of category ids a search should cover.

    Only direct children are included. Deeper levels exist for navigation
    but the category picker only offers main and sub categories, so search
    never descends into grandchildren unless `recursive=True` is asked for.
    """

    def __init__(self, store: ListingStore) -> None:
        self.store = store

    async def expand(self, category_id: int, recursive: bool = False) -> set[int]:
        """
        Returns the category id itself plus the ids of its children.

        An unknown category id expands to itself, the search then simply
        matches nothing. Nothing is cached, categories may change between
        calls.
        """
        category_ids = {category_id}
        frontier = [category_id]

        while frontier:
            children = await self.store.get_child_category_ids(frontier)
            frontier = [child for child in children if child not in category_ids]
            category_ids.update(frontier)
            if not recursive:
                break

        logger.debug("Expanded category %s to %s", category_id, sorted(category_ids))
        return category_ids

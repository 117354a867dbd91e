"""Random-key passage sampling.

Every passage carries a `rand_key` drawn uniformly from [0, 1) when it is
inserted. To pick a passage we draw a cut point k and take the eligible
passage with the smallest key >= k, wrapping around to the smallest key
below k when nothing lies above. Keys are treated as points on a circle, so
each passage is chosen with probability equal to the gap before it, which is
uniform in expectation, and the lookup is a single index range scan.
"""
import random
from collections.abc import Sequence

from sqlalchemy import Select, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import Category
from app.models.passage import Passage


def draw_cut_point(rng: random.Random | None = None) -> float:
    """Uniform cut point in [0, 1)."""
    return (rng or random).random()


def _eligible(category_filter: Sequence[int], exclude: Select | None) -> Select:
    stmt = select(
        Passage.id,
        Passage.text,
        Category.name.label("category_name"),
        Category.css_category.label("category_theme"),
        Category.theme_tokens,
    ).join(Category, Category.id == Passage.category_id)
    if category_filter:
        stmt = stmt.where(Passage.category_id.in_(list(category_filter)))
    if exclude is not None:
        stmt = stmt.where(Passage.id.not_in(exclude))
    return stmt


async def pick_passage(
    db: AsyncSession,
    k: float,
    category_filter: Sequence[int] = (),
    exclude: Select | None = None,
) -> Row | None:
    """Return the first eligible passage at or after `k` on the key circle, or None.

    `exclude` is a SELECT of passage ids to leave out; it is embedded as a
    sub-select so ids are never interpolated into SQL text.
    """
    eligible = _eligible(category_filter, exclude)
    order = (Passage.rand_key.asc(), Passage.id.asc())

    result = await db.execute(eligible.where(Passage.rand_key >= k).order_by(*order).limit(1))
    row = result.first()
    if row is not None:
        return row

    # wrap around
    result = await db.execute(eligible.where(Passage.rand_key < k).order_by(*order).limit(1))
    return result.first()

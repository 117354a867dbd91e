"""Seed default categories and a handful of sample passages on an empty database."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import Category
from app.models.passage import Passage, SourceType

logger = logging.getLogger(__name__)


def _theme(accent: str, bg: str = "#0f172a", surface: str = "#1e293b", text: str = "#f8fafc") -> dict:
    return {"palette": {"bg": bg, "surface": surface, "text": text, "accent": accent}}


# (name, css_category, theme_tokens)
DEFAULT_CATEGORIES = [
    ("Classic Literature", "literature", _theme("#b45309", bg="#1c1917", surface="#292524")),
    ("Poetry", "poetry", _theme("#db2777")),
    ("Sci-Fi", "scifi", _theme("#22d3ee", bg="#020617")),
    ("Fantasy", "fantasy", _theme("#a855f7")),
    ("Philosophy", "philosophy", _theme("#64748b")),
    ("News-style", "news", _theme("#ef4444", bg="#ffffff", surface="#f1f5f9", text="#0f172a")),
    ("Legal/Policy", "legal", _theme("#1d4ed8", bg="#f8fafc", surface="#e2e8f0", text="#0f172a")),
    ("Technical/Academic", "academic", _theme("#16a34a")),
    ("AI: Narrative - Flowery", "ai-narrative", _theme("#f59e0b")),
    ("AI: Expository - Corporate", "ai-corporate", _theme("#0ea5e9")),
    ("AI: Imitative - 19th-Century", "ai-imitative", _theme("#78350f", bg="#fef3c7", surface="#fde68a", text="#1c1917")),
]

# (category name, source, text)
SAMPLE_PASSAGES = [
    (
        "Classic Literature",
        SourceType.HUMAN,
        "The lighthouse had outlived three keepers and would likely outlive a fourth. Salt had eaten "
        "the railings down to lace, and every winter the sea took another step of the stair. Still the "
        "lamp turned, because someone always climbed up to wind it.",
    ),
    (
        "AI: Narrative - Flowery",
        SourceType.AI,
        "In the shimmering tapestry of the digital dawn, algorithms danced with breathtaking elegance, "
        "weaving luminous threads of data into a symphony of boundless possibility. Each iteration "
        "unveiled revelations of profound and extraordinary magnitude.",
    ),
    (
        "Technical/Academic",
        SourceType.HUMAN,
        "We observed a weak but significant correlation (r = 0.21, p < 0.01) between commute length "
        "and reported sleep quality. The effect disappeared once shift work was controlled for, which "
        "suggests the first result was mostly a scheduling artefact.",
    ),
    (
        "Sci-Fi",
        SourceType.HUMAN,
        "The tomatoes in hab four came in lopsided and pale, and Chen ate the first one standing up, "
        "juice running into her glove seal. Forty million kilometres from the nearest grocery, it was "
        "the best thing she had tasted in a year.",
    ),
    (
        "AI: Expository - Corporate",
        SourceType.AI,
        "By leveraging cross-functional synergies and a holistic, data-driven approach, our "
        "organisation continues to unlock transformative value for stakeholders while delivering "
        "robust, scalable solutions across every vertical.",
    ),
    (
        "Fantasy",
        SourceType.HUMAN,
        "Nobody had told Elara the staff would be heavy. The songs made it sound like a wand. It was "
        "closer to a fence post, and it hummed against her teeth whenever the king's men came near.",
    ),
    (
        "AI: Imitative - 19th-Century",
        SourceType.AI,
        "Upon most careful consideration of the matter before us, one cannot but acknowledge the "
        "profound gravity of such deliberations, the distinguished assembly having resolved, with "
        "becoming solemnity, upon a course most befitting our present epoch.",
    ),
    (
        "News-style",
        SourceType.HUMAN,
        "Residents raised $2.1 million in six weeks to keep the Orpheum from the wrecking ball. The "
        "city council voted 7-2 on Tuesday to buy the building and lease it to a nonprofit arts group "
        "for one dollar a year.",
    ),
    (
        "Philosophy",
        SourceType.HUMAN,
        "If a perfect copy of you woke up tomorrow with all your memories, it would insist it was you, "
        "and it would have exactly the evidence you have. That is an uncomfortable amount of evidence "
        "to share with a stranger.",
    ),
    (
        "Legal/Policy",
        SourceType.AI,
        "Pursuant to the provisions set forth herein, all parties shall be bound by the terms and "
        "conditions of this Agreement, and any dispute arising from its interpretation shall be "
        "resolved by binding arbitration in accordance with applicable law.",
    ),
]


async def seed_catalog(db: AsyncSession) -> int:
    """Insert default categories and sample passages if there are no categories yet.

    Returns the number of passages inserted (0 when the catalog already exists).
    """
    existing = (await db.execute(select(func.count(Category.id)))).scalar_one()
    if existing:
        return 0

    categories = {name: Category(name=name, css_category=css, theme_tokens=tokens) for name, css, tokens in DEFAULT_CATEGORIES}
    db.add_all(categories.values())
    await db.flush()

    db.add_all(
        Passage(text=text, source_type=source, category_id=categories[category].id)
        for category, source, text in SAMPLE_PASSAGES
    )
    await db.commit()

    logger.info(f"Seeded {len(categories)} categories and {len(SAMPLE_PASSAGES)} passages")
    return len(SAMPLE_PASSAGES)

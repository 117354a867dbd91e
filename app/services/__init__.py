from app.services.lifecycle import SessionLifecycleService
from app.services.sampling import draw_cut_point, pick_passage
from app.services.seeding import seed_catalog

__all__ = ["SessionLifecycleService", "draw_cut_point", "pick_passage", "seed_catalog"]

from src.roster_pipeline.cleaning import RosterCleaner
from src.roster_pipeline.ingestion import RosterIngester, RosterIngestionError
from src.roster_pipeline.loader import filter_roster, load_roster

__all__ = [
    "RosterCleaner",
    "RosterIngester",
    "RosterIngestionError",
    "filter_roster",
    "load_roster",
]

"""
Campus venues with known coordinates.
Used to fill in venue coordinates when an event is posted with only a venue name.
Add or edit entries; ``id`` is the stable key, ``keywords`` drive suggestions.
"""
from typing import NamedTuple, Tuple


class Venue(NamedTuple):
    id: str
    name: str
    lat: float
    lng: float
    category: str
    keywords: Tuple[str, ...]


CAMPUS_VENUES: Tuple[Venue, ...] = (
    Venue("seecs", "SEECS", 33.6433, 72.9916, "Academic", ("seecs", "electrical", "cs")),
    Venue("nbs", "NBS", 33.6454, 72.9922, "Academic", ("nbs", "business")),
    Venue("s3h", "S3H", 33.6468, 72.9932, "Academic", ("s3h", "social", "sciences")),
    Venue("sada", "SADA", 33.6465, 72.9948, "Academic", ("sada", "art", "architecture")),
    Venue("sns", "SNS", 33.6444, 72.9904, "Academic", ("sns", "natural")),
    Venue("smme", "SMME", 33.6508, 72.9972, "Academic", ("smme", "mechanical")),
    Venue("scme", "SCME", 33.6496, 73.0003, "Academic", ("scme", "chemical", "materials")),
    Venue("asab", "ASAB", 33.6416, 72.9868, "Academic", ("asab", "bio")),
    Venue("nshs", "NSHS", 33.6410, 72.9860, "Academic", ("nshs", "health")),
    Venue("sines", "SINES", 33.6425, 72.9905, "Academic", ("sines",)),
    Venue("cips", "CIPS", 33.6430, 72.9900, "Academic", ("cips", "planning")),
    Venue("upcase", "UPCASE", 33.6455, 72.9985, "Academic", ("upcase",)),
    Venue("jsppl", "JSPPL", 33.6460, 72.9990, "Academic", ("jsppl",)),
    Venue("iese", "IESE (SCEE)", 33.6472, 73.0036, "Academic", ("iese", "scee")),
    Venue("nice", "NICE (SCEE)", 33.6477, 73.0028, "Academic", ("nice", "scee")),
    Venue("igis", "IGIS (SCEE)", 33.6480, 73.0012, "Academic", ("igis", "scee")),
    Venue("c1", "Concordia 1 (C1)", 33.6458, 72.9914, "Cafe", ("c1", "cafe", "food")),
    Venue("c2", "Concordia 2 (C2)", 33.6500, 72.9980, "Cafe", ("c2", "cafe", "food")),
    Venue("c3", "C3 / South Edge", 33.6405, 72.9875, "Cafe", ("c3", "cafe", "food")),
    Venue("central-library-cafe", "Central Library Cafe", 33.6465, 72.9910, "Cafe", ("library", "cafe")),
    Venue("jinnah-aud", "Jinnah Auditorium", 33.6460, 72.9925, "Auditorium", ("jinnah", "auditorium")),
    Venue("old-gym", "Old Gym", 33.6510, 72.9930, "Sports", ("gym", "sports")),
    Venue("new-gym", "New Gym", 33.6518, 72.9942, "Sports", ("gym", "sports")),
    Venue("nbs-ground", "NBS Ground", 33.6450, 72.9928, "Sports", ("nbs", "ground")),
    Venue("hbl-ground", "HBL Ground", 33.6475, 72.9905, "Sports", ("hbl", "ground")),
    Venue("cricket-ground", "Cricket Ground", 33.6490, 72.9910, "Sports", ("cricket", "ground")),
    Venue("main-office", "Main Office (Admin)", 33.6475, 72.9915, "Faculty/Admin", ("main", "office", "admin")),
    Venue("faculty-housing", "Faculty Housing", 33.6400, 73.0050, "Faculty/Admin", ("faculty", "housing")),
)

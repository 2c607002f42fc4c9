"""Read-only content catalog: floor types, staff, readers, VIPs, events, shop items.

The engine never mutates catalog entries; it only looks them up by id.
``Catalog.default()`` builds the bundled content set. Alternative content
can be supplied by constructing a ``Catalog`` directly.

Key types:
  FloorTypeDef   build cost/time and stock categories of a floor type
  StaffTypeDef   hire cost; standard staff fill slots in ``STANDARD_STAFF_ORDER``
  ReaderTypeDef  archetype weight, books per visit, preferred floor types
  VipTypeDef     VIP ability and spawn chance (chances sum to < 1)
  EventDef       global event duration and effect descriptors
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic.dataclasses import dataclass as pydantic_dataclass

from simlibrary.core.effects import Effect
from simlibrary.core.enums import EffectKind, FloorKind, MiniQuestKind


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------

@pydantic_dataclass(frozen=True)
class CategoryDef:
    name: str
    stock_cost: int
    stock_time: int            # seconds
    earning_rate: int
    stock_amount: int = 100


@pydantic_dataclass(frozen=True)
class FloorTypeDef:
    id: str
    name: str
    build_cost: int
    build_time: int            # seconds
    categories: tuple[CategoryDef, ...] = ()
    kind: FloorKind = FloorKind.STANDARD
    utility_roles: tuple[str, ...] = ()   # fixed slot order for utility floors
    emoji: str = ""


@pydantic_dataclass(frozen=True)
class StaffTypeDef:
    id: str
    name: str
    hire_cost: int
    utility: bool = False
    emoji: str = ""


@pydantic_dataclass(frozen=True)
class ReaderTypeDef:
    id: str
    name: str
    weight: float
    books: int = 1
    preferred_floors: tuple[str, ...] = ()
    emoji: str = ""


@pydantic_dataclass(frozen=True)
class VipTypeDef:
    id: str
    name: str
    ability: str
    spawn_chance: float
    description: str = ""
    emoji: str = ""


@pydantic_dataclass(frozen=True)
class EventDef:
    id: str
    name: str
    duration_s: int
    effects: tuple[Effect, ...] = ()
    description: str = ""


@pydantic_dataclass(frozen=True)
class DonationSource:
    id: str
    name: str
    stars: int


@pydantic_dataclass(frozen=True)
class SynergyDef:
    """Bonus active while every ``required_types`` floor is ready."""

    id: str
    name: str
    required_types: tuple[str, ...]
    bonus: float


@pydantic_dataclass(frozen=True)
class HolidayDef:
    id: str
    name: str
    month: int
    day: int
    star_bonus: float


@pydantic_dataclass(frozen=True)
class IncidentDef:
    id: str
    name: str
    fixer_role: str
    probability: float         # per tick
    fix_seconds: int


@pydantic_dataclass(frozen=True)
class WeatherDef:
    id: str
    name: str
    spawn_multiplier: float
    mood_delta: float
    season_weights: tuple[float, float, float, float]   # spring, summer, autumn, winter


@pydantic_dataclass(frozen=True)
class AchievementDef:
    id: str
    name: str
    stat_key: str
    requirement: int
    reward_stars: int = 0
    reward_bucks: int = 0


@pydantic_dataclass(frozen=True)
class PrestigeDef:
    id: str
    name: str
    threshold: int             # total stars earned


@pydantic_dataclass(frozen=True)
class PerkDef:
    id: str
    name: str
    cost_bucks: int
    effects: tuple[Effect, ...] = ()
    required_prestige: str = "community"


@pydantic_dataclass(frozen=True)
class UpgradeDef:
    id: str
    name: str
    cost_stars: int
    effects: tuple[Effect, ...] = ()


@pydantic_dataclass(frozen=True)
class DecorationDef:
    id: str
    name: str
    placement: str             # "lobby" | "floor"
    cost: int
    unlock_prestige: str = "community"


@pydantic_dataclass(frozen=True)
class ThemeDef:
    id: str
    name: str
    cost: int


@pydantic_dataclass(frozen=True)
class MiniQuestDef:
    id: str
    name: str
    kind: MiniQuestKind
    count_range: tuple[int, int]
    reward_stars: int


@pydantic_dataclass(frozen=True)
class HallEventDef:
    id: str
    name: str


# ---------------------------------------------------------------------------
# Catalog container
# ---------------------------------------------------------------------------

STANDARD_STAFF_ORDER: tuple[str, ...] = ("page", "clerk", "librarian")
BASEMENT_TYPE_ID = "basement"


def _by_id(items) -> dict:
    return {item.id: item for item in items}


@dataclass
class Catalog:
    """Id-keyed lookup tables for every content family."""

    floor_types: dict[str, FloorTypeDef] = field(default_factory=dict)
    staff_types: dict[str, StaffTypeDef] = field(default_factory=dict)
    reader_types: list[ReaderTypeDef] = field(default_factory=list)
    vip_types: list[VipTypeDef] = field(default_factory=list)
    events: dict[str, EventDef] = field(default_factory=dict)
    donation_sources: list[DonationSource] = field(default_factory=list)
    synergies: list[SynergyDef] = field(default_factory=list)
    holidays: list[HolidayDef] = field(default_factory=list)
    incidents: list[IncidentDef] = field(default_factory=list)
    weather: list[WeatherDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)
    prestige_levels: list[PrestigeDef] = field(default_factory=list)
    perks: dict[str, PerkDef] = field(default_factory=dict)
    upgrades: dict[str, UpgradeDef] = field(default_factory=dict)
    decorations: dict[str, DecorationDef] = field(default_factory=dict)
    themes: dict[str, ThemeDef] = field(default_factory=dict)
    mini_quests: list[MiniQuestDef] = field(default_factory=list)
    hall_events: list[HallEventDef] = field(default_factory=list)
    first_names: tuple[str, ...] = ()
    last_names: tuple[str, ...] = ()
    lost_items: tuple[str, ...] = ()

    def buildable_floor_types(self) -> list[FloorTypeDef]:
        return [t for t in self.floor_types.values() if t.kind != FloorKind.BASEMENT]

    def standard_floor_ids(self) -> list[str]:
        return [t.id for t in self.floor_types.values() if t.kind == FloorKind.STANDARD]

    def vip_type(self, vip_id: str) -> VipTypeDef | None:
        for v in self.vip_types:
            if v.id == vip_id:
                return v
        return None

    def reader_type(self, type_id: str) -> ReaderTypeDef | None:
        for r in self.reader_types:
            if r.id == type_id:
                return r
        return None

    def prestige_index(self, prestige_id: str) -> int:
        for i, p in enumerate(self.prestige_levels):
            if p.id == prestige_id:
                return i
        return -1

    @classmethod
    def default(cls) -> Catalog:
        return cls(
            floor_types=_by_id(_FLOOR_TYPES),
            staff_types=_by_id(_STAFF_TYPES),
            reader_types=list(_READER_TYPES),
            vip_types=list(_VIP_TYPES),
            events=_by_id(_EVENTS),
            donation_sources=list(_DONATIONS),
            synergies=list(_SYNERGIES),
            holidays=list(_HOLIDAYS),
            incidents=list(_INCIDENTS),
            weather=list(_WEATHER),
            achievements=list(_ACHIEVEMENTS),
            prestige_levels=list(_PRESTIGE),
            perks=_by_id(_PERKS),
            upgrades=_by_id(_UPGRADES),
            decorations=_by_id(_DECORATIONS),
            themes=_by_id(_THEMES),
            mini_quests=list(_MINI_QUESTS),
            hall_events=list(_HALL_EVENTS),
            first_names=_FIRST_NAMES,
            last_names=_LAST_NAMES,
            lost_items=_LOST_ITEMS,
        )


# ---------------------------------------------------------------------------
# Bundled content
# ---------------------------------------------------------------------------

def _floor(type_id: str, name: str, cost: int, build_time: int, emoji: str,
           cats: list[tuple[str, int, int, int]]) -> FloorTypeDef:
    return FloorTypeDef(
        id=type_id, name=name, build_cost=cost, build_time=build_time, emoji=emoji,
        categories=tuple(CategoryDef(name=n, stock_cost=c, stock_time=t, earning_rate=r) for n, c, t, r in cats),
    )


_FLOOR_TYPES: list[FloorTypeDef] = [
    # Children's section
    _floor("board_books", "Board Books", 100, 30, "👶",
           [("Oversize", 10, 15, 2), ("Chubby", 15, 20, 3), ("Moveable Parts", 25, 30, 5)]),
    _floor("picture_books", "Picture Books", 150, 35, "📖",
           [("Animals", 12, 18, 3), ("Cars", 18, 25, 4), ("Planets", 30, 40, 6)]),
    _floor("early_readers", "Early Readers", 200, 40, "📚",
           [("Level 1", 15, 20, 3), ("Level 2", 22, 30, 5), ("Level 3", 35, 45, 7)]),
    _floor("juvenile_series", "Juvenile Series", 250, 50, "⚔️",
           [("Warriors", 20, 25, 4), ("Superheroes", 28, 35, 6), ("Baby-Sitters", 40, 50, 8)]),
    _floor("teen", "Teen", 300, 60, "🎓",
           [("Romance", 25, 30, 5), ("Sports", 32, 40, 6), ("Dystopian", 45, 55, 9)]),
    # Fiction
    _floor("fiction", "Fiction", 350, 70, "📕",
           [("Classic", 30, 35, 6), ("Contemporary", 40, 45, 8), ("Literary", 55, 60, 11)]),
    _floor("mystery", "Mystery", 400, 80, "🔍",
           [("Suspense", 32, 40, 6), ("Thriller", 45, 50, 9), ("Detective", 60, 65, 12)]),
    _floor("romance", "Romance", 450, 90, "💕",
           [("Historical", 35, 42, 7), ("Fantasy", 48, 55, 10), ("Bodice Ripper", 65, 70, 13)]),
    _floor("scifi", "Science Fiction", 500, 100, "🚀",
           [("Planetary", 38, 45, 8), ("Robotic", 50, 58, 10), ("Alternate Universe", 70, 75, 14)]),
    _floor("fantasy", "Fantasy", 550, 110, "🐉",
           [("Dragons", 40, 48, 8), ("Witches", 52, 60, 11), ("Monsters", 72, 78, 15)]),
    _floor("true_crime", "True Crime", 600, 120, "🚨",
           [("Families", 42, 50, 9), ("Business", 55, 62, 11), ("The Mob", 75, 80, 15)]),
    _floor("graphic_novels", "Graphic Novels", 650, 130, "💥",
           [("Manga", 45, 52, 9), ("Anime", 58, 65, 12), ("Superheroes", 78, 85, 16)]),
    # Non-fiction
    _floor("biography", "Biography", 700, 140, "👤",
           [("Historical Figures", 48, 55, 10), ("Sports Figures", 60, 68, 12), ("Pop Culture", 80, 88, 16)]),
    _floor("history", "History", 750, 150, "📜",
           [("Battles", 50, 58, 10), ("Explorers", 62, 70, 13), ("Medieval", 82, 90, 17)]),
    _floor("local_history", "Local History", 800, 160, "🏛️",
           [("Cemeteries", 52, 60, 11), ("Founders", 65, 72, 13), ("Sports", 85, 92, 17)]),
    _floor("science", "Science", 850, 170, "🔬",
           [("Biology", 55, 62, 11), ("Chemistry", 68, 75, 14), ("Astronomy", 88, 95, 18)]),
    _floor("technology", "Technology", 900, 180, "💻",
           [("Programming", 58, 65, 12), ("Inventions", 70, 78, 14), ("Discoveries", 90, 98, 18)]),
    _floor("sports", "Sports", 950, 190, "⚽",
           [("Baseball", 60, 68, 12), ("Football", 72, 80, 15), ("Soccer", 92, 100, 19)]),
    _floor("cookbooks", "Cookbooks", 1000, 200, "🍳",
           [("International", 62, 70, 13), ("Home Cooking", 75, 82, 15), ("Haute Cuisine", 95, 102, 19)]),
    _floor("library_of_things", "Library of Things", 1200, 220, "🎮",
           [("Board Games", 70, 75, 14), ("Yard Games", 85, 88, 17), ("DVDs", 100, 110, 20)]),
    # Cafe & food service
    _floor("coffee_shop", "Coffee Shop", 250, 45, "☕",
           [("Drip Coffee", 18, 22, 4), ("Espresso Drinks", 28, 35, 6), ("Cold Brew", 40, 50, 8)]),
    _floor("bakery", "Bakery Corner", 300, 50, "🥐",
           [("Danish Pastries", 20, 25, 4), ("Muffins & Scones", 32, 38, 6), ("Specialty Cakes", 48, 55, 9)]),
    _floor("hot_drinks_cafe", "Hot Drinks Café", 280, 48, "🍫",
           [("Hot Chocolate", 22, 28, 5), ("Tea Selection", 16, 20, 3), ("Specialty Lattes", 35, 42, 7)]),
    _floor("snack_bar", "Snack Bar", 220, 40, "🍿",
           [("Popcorn & Chips", 12, 15, 3), ("Cookies & Bars", 25, 30, 5), ("Fruit & Yogurt", 38, 45, 8)]),
    # Utility
    FloorTypeDef(id="bathroom", name="Restrooms", build_cost=400, build_time=60, emoji="🚻",
                 kind=FloorKind.UTILITY, utility_roles=("attendant",)),
    FloorTypeDef(id=BASEMENT_TYPE_ID, name="Basement", build_cost=0, build_time=0, emoji="🔧",
                 kind=FloorKind.BASEMENT, utility_roles=("janitor", "technician", "security")),
]

_STAFF_TYPES: list[StaffTypeDef] = [
    StaffTypeDef(id="page", name="Page", hire_cost=50, emoji="👤"),
    StaffTypeDef(id="clerk", name="Clerk", hire_cost=100, emoji="👔"),
    StaffTypeDef(id="librarian", name="Librarian", hire_cost=150, emoji="👓"),
    StaffTypeDef(id="janitor", name="Janitor", hire_cost=120, utility=True, emoji="🧹"),
    StaffTypeDef(id="technician", name="Technician", hire_cost=180, utility=True, emoji="🔌"),
    StaffTypeDef(id="security", name="Security Guard", hire_cost=160, utility=True, emoji="🛡️"),
    StaffTypeDef(id="attendant", name="Restroom Attendant", hire_cost=80, utility=True, emoji="🧻"),
]

_READER_TYPES: list[ReaderTypeDef] = [
    ReaderTypeDef(id="kid", name="Kid", weight=25, emoji="👧",
                  preferred_floors=("board_books", "picture_books", "early_readers", "juvenile_series", "snack_bar")),
    ReaderTypeDef(id="teen", name="Teen", weight=20, emoji="🧑",
                  preferred_floors=("teen", "graphic_novels", "juvenile_series", "fantasy", "scifi")),
    ReaderTypeDef(id="adult", name="Adult", weight=30, emoji="👔"),
    ReaderTypeDef(id="senior", name="Senior", weight=15, emoji="👴",
                  preferred_floors=("biography", "history", "local_history", "cookbooks", "hot_drinks_cafe")),
    ReaderTypeDef(id="student", name="Student", weight=10, books=2, emoji="🎓",
                  preferred_floors=("science", "technology", "history", "coffee_shop")),
]

_VIP_TYPES: list[VipTypeDef] = [
    VipTypeDef(id="speed_reader", name="Speed Reader", ability="instant_checkout", spawn_chance=0.05,
               description="Checks out instantly!", emoji="⚡"),
    VipTypeDef(id="big_spender", name="Big Spender", ability="double_stars", spawn_chance=0.06,
               description="Pays 2x stars!", emoji="💰"),
    VipTypeDef(id="book_deliverer", name="Book Deliverer", ability="instant_restock", spawn_chance=0.04,
               description="Restocks a random category!", emoji="📦"),
    VipTypeDef(id="celebrity", name="Celebrity Reader", ability="attract_readers", spawn_chance=0.03,
               description="Attracts 3 more readers!", emoji="🌟"),
    VipTypeDef(id="tower_buck_tipper", name="Generous Patron", ability="tower_bucks", spawn_chance=0.02,
               description="Tips 1 Tower Buck!", emoji="💎"),
    VipTypeDef(id="book_critic", name="Book Critic", ability="floor_bonus", spawn_chance=0.03,
               description="A glowing review boosts the floor's earnings!", emoji="🧐"),
]

_EVENTS: list[EventDef] = [
    EventDef(id="book_fair", name="Book Fair", duration_s=120,
             effects=(Effect(kind=EffectKind.STAR_MULTIPLIER, params={"value": 1.5}),),
             description="Every checkout earns 50% more stars."),
    EventDef(id="author_visit", name="Author Visit", duration_s=90,
             effects=(Effect(kind=EffectKind.SPAWN_RATE, params={"value": 2.0}),),
             description="Readers flock to the library."),
    EventDef(id="delivery_day", name="Delivery Day", duration_s=60,
             effects=(Effect(kind=EffectKind.RESTOCK_ALL),
                      Effect(kind=EffectKind.RESTOCK_SPEED, params={"value": 2.0})),
             description="A truck restocks every shelf and restocking is faster."),
    EventDef(id="donation_drive", name="Donation Drive", duration_s=30,
             effects=(Effect(kind=EffectKind.DONATION),),
             description="A local patron sends a donation."),
    EventDef(id="quiet_day", name="Quiet Day", duration_s=120,
             effects=(Effect(kind=EffectKind.SPAWN_RATE, params={"value": 0.5}),
                      Effect(kind=EffectKind.MOOD, params={"value": 5})),
             description="Fewer readers, happier staff."),
    EventDef(id="patron_gala", name="Patron Gala", duration_s=30,
             effects=(Effect(kind=EffectKind.GRANT_BUCKS, params={"value": 1}),),
             description="Patrons tip a Tower Buck."),
]

_DONATIONS: list[DonationSource] = [
    DonationSource(id="friends", name="Friends of the Library", stars=150),
    DonationSource(id="bookstore", name="Local Bookstore", stars=100),
    DonationSource(id="council", name="City Council", stars=250),
    DonationSource(id="alumni", name="School Alumni", stars=120),
]

_SYNERGIES: list[SynergyDef] = [
    SynergyDef(id="cafe_culture", name="Café Culture", required_types=("coffee_shop", "bakery"), bonus=1.2),
    SynergyDef(id="kids_corner", name="Kids Corner",
               required_types=("board_books", "picture_books", "early_readers"), bonus=1.15),
    SynergyDef(id="mystery_night", name="Mystery Night", required_types=("mystery", "true_crime"), bonus=1.1),
    SynergyDef(id="study_hall", name="Study Hall",
               required_types=("science", "technology", "coffee_shop"), bonus=1.15),
]

_HOLIDAYS: list[HolidayDef] = [
    HolidayDef(id="new_year", name="New Year's Day", month=1, day=1, star_bonus=1.5),
    HolidayDef(id="world_book_day", name="World Book Day", month=4, day=23, star_bonus=2.0),
    HolidayDef(id="halloween", name="Halloween", month=10, day=31, star_bonus=1.25),
    HolidayDef(id="winter_holiday", name="Winter Holiday", month=12, day=25, star_bonus=1.5),
]

_INCIDENTS: list[IncidentDef] = [
    IncidentDef(id="spill", name="Coffee Spill", fixer_role="janitor", probability=0.002, fix_seconds=30),
    IncidentDef(id="power_outage", name="Power Outage", fixer_role="technician", probability=0.001, fix_seconds=60),
    IncidentDef(id="noise_complaint", name="Noise Complaint", fixer_role="security", probability=0.0015,
                fix_seconds=45),
]

_WEATHER: list[WeatherDef] = [
    WeatherDef(id="sunny", name="Sunny", spawn_multiplier=0.9, mood_delta=5, season_weights=(30, 45, 25, 15)),
    WeatherDef(id="cloudy", name="Cloudy", spawn_multiplier=1.0, mood_delta=0, season_weights=(30, 20, 30, 25)),
    WeatherDef(id="rainy", name="Rainy", spawn_multiplier=1.2, mood_delta=-3, season_weights=(30, 15, 30, 15)),
    WeatherDef(id="snowy", name="Snowy", spawn_multiplier=1.1, mood_delta=2, season_weights=(0, 0, 5, 35)),
    WeatherDef(id="stormy", name="Stormy", spawn_multiplier=0.7, mood_delta=-8, season_weights=(10, 20, 10, 10)),
]

_ACHIEVEMENTS: list[AchievementDef] = [
    AchievementDef(id="first_checkout", name="First Checkout", stat_key="total_books_checked_out",
                   requirement=1, reward_stars=10),
    AchievementDef(id="bookworm", name="Bookworm", stat_key="total_books_checked_out",
                   requirement=100, reward_stars=200),
    AchievementDef(id="bibliophile", name="Bibliophile", stat_key="total_books_checked_out",
                   requirement=1000, reward_bucks=2),
    AchievementDef(id="crowd_pleaser", name="Crowd Pleaser", stat_key="total_readers_served",
                   requirement=50, reward_stars=150),
    AchievementDef(id="vip_lounge", name="VIP Lounge", stat_key="total_vips_served",
                   requirement=10, reward_bucks=1),
    AchievementDef(id="on_a_mission", name="On a Mission", stat_key="total_missions_completed",
                   requirement=5, reward_bucks=1),
    AchievementDef(id="skyscraper", name="Skyscraper", stat_key="total_floors_built",
                   requirement=10, reward_stars=500),
    AchievementDef(id="team_builder", name="Team Builder", stat_key="total_staff_hired",
                   requirement=10, reward_stars=250),
    AchievementDef(id="star_collector", name="Star Collector", stat_key="total_stars_earned",
                   requirement=10_000, reward_bucks=2),
    AchievementDef(id="fixer_upper", name="Fixer Upper", stat_key="total_incidents_fixed",
                   requirement=5, reward_stars=300),
]

_PRESTIGE: list[PrestigeDef] = [
    PrestigeDef(id="community", name="Community Library", threshold=0),
    PrestigeDef(id="town", name="Town Library", threshold=10_000),
    PrestigeDef(id="city", name="City Library", threshold=50_000),
    PrestigeDef(id="regional", name="Regional Library", threshold=200_000),
    PrestigeDef(id="national", name="National Library", threshold=1_000_000),
    PrestigeDef(id="world", name="World Library", threshold=5_000_000),
]

_PERKS: list[PerkDef] = [
    PerkDef(id="star_boost", name="Star Boost", cost_bucks=3,
            effects=(Effect(kind=EffectKind.EARNING_BONUS, params={"value": 0.10}),)),
    PerkDef(id="star_boost_plus", name="Star Boost+", cost_bucks=6, required_prestige="town",
            effects=(Effect(kind=EffectKind.EARNING_BONUS, params={"value": 0.15}),)),
    PerkDef(id="quick_build", name="Quick Build", cost_bucks=4,
            effects=(Effect(kind=EffectKind.BUILD_SPEED, params={"value": 1.25}),)),
    PerkDef(id="night_owl", name="Night Owl", cost_bucks=5,
            effects=(Effect(kind=EffectKind.OFFLINE_HOURS, params={"value": 1}),)),
]

_UPGRADES: list[UpgradeDef] = [
    UpgradeDef(id="express_elevator", name="Express Elevator", cost_stars=2000,
               effects=(Effect(kind=EffectKind.ELEVATOR_SPEED, params={"value": 2.0}),)),
    UpgradeDef(id="restock_carts", name="Restock Carts", cost_stars=1500,
               effects=(Effect(kind=EffectKind.RESTOCK_SPEED, params={"value": 1.2}),)),
    UpgradeDef(id="extended_hours", name="Extended Hours", cost_stars=3000,
               effects=(Effect(kind=EffectKind.OFFLINE_HOURS, params={"value": 1}),)),
    UpgradeDef(id="late_night_hours", name="Late Night Hours", cost_stars=8000,
               effects=(Effect(kind=EffectKind.OFFLINE_HOURS, params={"value": 2}),)),
]

_DECORATIONS: list[DecorationDef] = [
    DecorationDef(id="potted_plant", name="Potted Plant", placement="lobby", cost=100),
    DecorationDef(id="reading_lamp", name="Reading Lamp", placement="floor", cost=150),
    DecorationDef(id="fish_tank", name="Fish Tank", placement="lobby", cost=600, unlock_prestige="town"),
    DecorationDef(id="bean_bags", name="Bean Bags", placement="floor", cost=400, unlock_prestige="town"),
    DecorationDef(id="fountain", name="Fountain", placement="lobby", cost=2500, unlock_prestige="city"),
    DecorationDef(id="stained_glass", name="Stained Glass", placement="floor", cost=5000, unlock_prestige="regional"),
]

_THEMES: list[ThemeDef] = [
    ThemeDef(id="classic", name="Classic", cost=0),
    ThemeDef(id="modern", name="Modern", cost=1000),
    ThemeDef(id="cozy_cabin", name="Cozy Cabin", cost=2500),
]

_MINI_QUESTS: list[MiniQuestDef] = [
    MiniQuestDef(id="quick_checkouts", name="Busy Shelves", kind=MiniQuestKind.CHECKOUT,
                 count_range=(5, 10), reward_stars=60),
    MiniQuestDef(id="vip_service", name="Red Carpet", kind=MiniQuestKind.VIP, count_range=(1, 2), reward_stars=120),
    MiniQuestDef(id="restock_rush", name="Restock Rush", kind=MiniQuestKind.RESTOCK,
                 count_range=(2, 4), reward_stars=80),
]

_HALL_EVENTS: list[HallEventDef] = [
    HallEventDef(id="author_signing", name="Author Signing"),
    HallEventDef(id="story_time", name="Story Time"),
    HallEventDef(id="book_club", name="Book Club Meetup"),
    HallEventDef(id="trivia_night", name="Trivia Night"),
]

_FIRST_NAMES: tuple[str, ...] = (
    "Alex", "Jamie", "Sam", "Taylor", "Morgan", "Casey", "Jordan", "Riley", "Avery", "Quinn",
    "Emma", "Liam", "Olivia", "Noah", "Ava", "Ethan", "Sophia", "Mason", "Isabella", "Lucas",
)

_LAST_NAMES: tuple[str, ...] = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez", "Martinez",
)

_LOST_ITEMS: tuple[str, ...] = (
    "reading glasses", "library card", "bookmark", "umbrella", "house keys", "scarf", "teddy bear",
)

"""Project-wide named constants.

Scoring tiers, weights and layout defaults used across the search,
view and navigation packages. Layout values are measured in the same
unit as the rendering surface (pixels for a web list, rows for a
terminal list).
"""

# Fuzzy scorer tiers
EXACT_SCORE: int = 1000
PREFIX_SCORE: int = 900
SUBSTRING_SCORE: int = 500
WORD_PREFIX_SCORE: int = 400
WORD_SUBSTRING_SCORE: int = 300
SUBSEQUENCE_BASE_SCORE: int = 300
CONSECUTIVE_BONUS: int = 10

# Queries longer than this never fall through to character-level matching.
LONG_QUERY_LENGTH: int = 6
# Queries up to this length accept any in-order subsequence.
SHORT_QUERY_LENGTH: int = 4
MIN_CONSECUTIVE: int = 2
MIN_MATCH_RATIO: float = 0.3

# Field weights
LABEL_WEIGHT: float = 3.0
DESCRIPTION_WEIGHT: float = 2.0
CATEGORY_WEIGHT: float = 1.0
KEYWORD_WEIGHT: float = 1.5

RECENCY_BOOST: float = 1.2

RECENT_GROUP: str = "Recent"
DEFAULT_CATEGORY: str = "Other"

MAX_RESULTS: int = 10
ITEM_HEIGHT: int = 48
CONTAINER_HEIGHT: int = 320
OVERSCAN: int = 5
VIRTUALIZATION_THRESHOLD: int = 50
PAGE_SIZE: int = 5
RECENT_LIMIT: int = 5

DEBOUNCE_SECONDS: float = 0.15

# Search-modal relevance: every matching rule adds its points
MODAL_TITLE_EXACT: int = 1000
MODAL_TITLE_PREFIX: int = 800
MODAL_TITLE_SUBSTRING: int = 600
MODAL_TITLE_WORD: int = 200
MODAL_DESCRIPTION: int = 300
MODAL_DESCRIPTION_WORD: int = 100
MODAL_CATEGORY: int = 150
MODAL_KEYWORD: int = 250
MODAL_KEYWORD_WORD: int = 50

# Idle search-modal view
POPULAR_LIMIT: int = 5
NO_RESULTS_QUICK_LINKS: int = 3

SCORING_MODES: tuple[str, ...] = ("fuzzy", "modal")

from dataclasses import dataclass, field

DOC_TYPES = frozenset({"invoice", "cv", "report", "letter", "contract", "other"})
SENTIMENTS = frozenset({"positive", "neutral", "negative"})
DESIRED_LENGTHS = frozenset({"short", "medium", "long"})

SUMMARY_REQUIRED_FIELDS: tuple[str, ...] = (
    "summary",
    "title",
    "keywords",
    "language",
    "domain",
    "sentiment",
)
ANALYSIS_REQUIRED_FIELDS: tuple[str, ...] = ("summary", "docType")

METADATA_TRUNCATED_NOTICE: dict[str, object] = {"notice": "Metadata truncated due to size."}


@dataclass(frozen=True)
class SummarizeOptions:
    """Advisory tuning for the synchronous summary prompt."""

    desired_length: str | None = None
    max_keywords: int | None = None


@dataclass(frozen=True)
class SummaryResult:
    """Validated output of the synchronous summarize workflow."""

    summary: str
    title: str
    keywords: list[str]
    language: str
    domain: str
    sentiment: str


@dataclass(frozen=True)
class DocumentAnalysis:
    """Validated output of the persisted analyze workflow."""

    summary: str
    doc_type: str
    metadata: dict[str, object] = field(default_factory=dict)

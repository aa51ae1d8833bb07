"""Domain models and error taxonomy used across application layer boundaries."""

from .errors import (
	ConflictError,
	InvalidInputError,
	InvalidStateError,
	LedgerError,
	NotFoundError,
	StaleWriteError,
	UpstreamFailureError,
)
from .models import (
	PRESALE_STATUS_ACTIVE,
	PRESALE_STATUS_CANCELLED,
	PRESALE_STATUS_COMPLETED,
	PRESALE_STATUSES,
	EnrichableRecord,
	EnrichedRecord,
	FeeRecord,
	HasPoolId,
	HasTokenRefs,
	HealthStatus,
	LiquidityPosition,
	Pool,
	Presale,
	PresaleContribution,
	Swap,
	Token,
)

__all__ = [
	"ConflictError",
	"InvalidInputError",
	"InvalidStateError",
	"LedgerError",
	"NotFoundError",
	"StaleWriteError",
	"UpstreamFailureError",
	"PRESALE_STATUS_ACTIVE",
	"PRESALE_STATUS_CANCELLED",
	"PRESALE_STATUS_COMPLETED",
	"PRESALE_STATUSES",
	"EnrichableRecord",
	"EnrichedRecord",
	"FeeRecord",
	"HasPoolId",
	"HasTokenRefs",
	"HealthStatus",
	"LiquidityPosition",
	"Pool",
	"Presale",
	"PresaleContribution",
	"Swap",
	"Token",
]

from .errors import (
	StubError,
	ValidationError,
	ResourceNotFound,
	EncodingError,
	MalformedMessage,
	SizeMismatch,
	SimulatedTransportError,
)  # NOQA: F401
from .timing import (
	FixedDuration,
	Rate,
	asTiming,
	SPEED_GPRS,
	SPEED_EDGE,
	SPEED_3G,
	SPEED_3GPLUS,
	SPEED_WIFI,
)  # NOQA: F401
from .headers import Headers  # NOQA: F401
from .model import StubResponse, StubBodyBlob, StubBodyFile, StubBodyStream  # NOQA: F401
from .schedule import Schedule, Emission, Failure  # NOQA: F401
from .delivery import deliver, Clock, MonotonicClock, VirtualClock  # NOQA: F401


# EOF

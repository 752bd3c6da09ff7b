"""Error taxonomy shared by the daylight engines."""


class LongerDaysError(Exception):
  """Base class for all daylight core errors."""


class UndefinedCrossingError(LongerDaysError):
  """The sun does not cross the requested zenith angle on that day (polar day or night)."""


class MissingReferenceError(LongerDaysError):
  """A comparison needs a snapshot that is neither cached nor computable."""


class OutOfBoundsInputError(LongerDaysError, ValueError):
  """Latitude or longitude outside the valid domain."""


class ProjectionHorizonExceededError(LongerDaysError):
  """A milestone search window was exhausted without a crossing."""

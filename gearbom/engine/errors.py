"""Error types raised by the resolver and the coverage run."""


class GearBomError(Exception):
    """Base class for gearbom domain errors."""


class ResolutionError(GearBomError, ValueError):
    """The resolver cannot model the request at all.

    Coverage runs classify these as ``invalid``; missing catalog records
    are never raised, they come back as ``found=False`` slots.
    """


class ModelDescriptorError(ResolutionError):
    """Model descriptor string could not be parsed."""


class MissingInputError(ResolutionError):
    """A required numeric or enumerated input is absent or out of range."""


class CoverageStoreError(GearBomError, RuntimeError):
    """Coverage persistence failed in a way that must abort the run."""


class CoverageRunInProgressError(GearBomError, RuntimeError):
    """Another coverage run currently holds the regeneration lock."""

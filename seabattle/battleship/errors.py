from __future__ import annotations


class SeaBattleError(Exception):
    """Base class for errors raised by the game model."""


class InvalidPlacement(SeaBattleError, ValueError):
    """A ship footprint leaves the grid or collides with another ship.

    Recoverable: deployment front-ends catch it and ask again.
    """


class PreconditionViolation(SeaBattleError):
    """The caller broke a contract it could have checked itself.

    Raised for out-of-bounds attacks and unknown ship names. Nothing in the
    package catches it.
    """


class DeploymentIncomplete(SeaBattleError):
    """Battle was requested before every ship of both fleets was deployed."""

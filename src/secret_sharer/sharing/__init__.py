"""Share generation, reconstruction and the share wire format."""

from .decode import build_system, recover_secret, recover_secrets, solve_in_place
from .encode import check_parameters, generate_share_matrix, generate_shares
from .sharer import SecretSharer, Share, serialized_size

__all__ = [
    "check_parameters",
    "generate_shares",
    "generate_share_matrix",
    "build_system",
    "solve_in_place",
    "recover_secret",
    "recover_secrets",
    "Share",
    "SecretSharer",
    "serialized_size",
]

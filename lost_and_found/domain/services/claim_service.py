"""Adjudication of ownership claims against stored verification secrets."""

from typing import Optional

from ..errors import InvalidArgumentError
from ..models.claim import ClaimStatus, VerificationInputs
from ..models.lost_item import LostItemSecrets


def adjudicate_claim(
    stored_secrets: Optional[LostItemSecrets],
    submitted: Optional[VerificationInputs],
) -> ClaimStatus:
    """Decide the initial status of a claim.

    A claim is verified only when both stored secrets are set and both
    submitted inputs equal them exactly (case-sensitive, untrimmed). Every
    other combination needs manual review.

    Args:
        stored_secrets: Secrets stored with the referenced lost item report
        submitted: Verification inputs from the claim, may be absent

    Returns:
        ClaimStatus.VERIFIED or ClaimStatus.PENDING

    Raises:
        InvalidArgumentError: If the stored secrets were not resolved
    """
    if stored_secrets is None:
        raise InvalidArgumentError("adjudicate_claim requires the stored secrets of a resolved lost item")

    if not stored_secrets.secret_info_1 or not stored_secrets.secret_info_2:
        return ClaimStatus.PENDING

    if submitted is None:
        return ClaimStatus.PENDING

    if (
        submitted.verification_input_1 == stored_secrets.secret_info_1
        and submitted.verification_input_2 == stored_secrets.secret_info_2
    ):
        return ClaimStatus.VERIFIED

    return ClaimStatus.PENDING

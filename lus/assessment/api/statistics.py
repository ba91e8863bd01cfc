"""
Aggregate figures about how a passage has been read and assessed.
"""

from lus.assessment.gateway import DjangoPersistenceGateway


def get_passage_assessment_stats(passage_id, since=None, gateway=None):
    """
    Summarize the recordings made of a passage.

    Args:
        passage_id (int): The passage.
        since (datetime): Only count recordings created at or after this time.
        gateway (PersistenceGateway): Defaults to the Django ORM gateway.

    Returns:
        dict with the keys `recording_count`, `avg_score` (average normalized
        assessment score, None without assessments), `avg_duration` (seconds,
        None without recordings) and `unique_users`.

    Raises:
        AssessmentInternalError: The statistics could not be computed.

    """
    if gateway is None:
        gateway = DjangoPersistenceGateway()
    return gateway.get_passage_stats(passage_id, since=since)

import logging

from blinker import signal

logger = logging.getLogger(__name__)

# ------------------------------------------
# Define signals
# ------------------------------------------
challenge_joined     = signal("challenge_joined")
points_awarded       = signal("points_awarded")
enrollment_withdrawn = signal("enrollment_withdrawn")
enrollments_expired  = signal("enrollments_expired")


# ------------------------------------------
# Listeners
# ------------------------------------------
@challenge_joined.connect
def on_challenge_joined(sender, **kwargs):
    enrollment = kwargs.get("enrollment")
    logger.info(
        "[listener] challenge_joined user=%s challenge=%s baseline=%s",
        enrollment.user_id, enrollment.challenge_id, enrollment.start_value,
    )


@points_awarded.connect
def on_points_awarded(sender, **kwargs):
    enrollment = kwargs.get("enrollment")
    logger.info(
        "[listener] points_awarded user=%s challenge=%s points=%s by admin=%s",
        enrollment.user_id, enrollment.challenge_id, kwargs.get("points"), kwargs.get("awarded_by"),
    )


@enrollment_withdrawn.connect
def on_enrollment_withdrawn(sender, **kwargs):
    enrollment = kwargs.get("enrollment")
    logger.info(
        "[listener] enrollment_withdrawn user=%s challenge=%s",
        enrollment.user_id, enrollment.challenge_id,
    )


@enrollments_expired.connect
def on_enrollments_expired(sender, **kwargs):
    enrollments = kwargs.get("enrollments") or []
    if enrollments:
        logger.info(
            "[listener] enrollments_expired count=%d ids=%s",
            len(enrollments), [e.id for e in enrollments],
        )

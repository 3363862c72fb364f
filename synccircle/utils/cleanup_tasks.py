# synccircle/utils/cleanup_tasks.py
from synccircle import db
from synccircle.models.token_blocklist import TokenBlocklist
from datetime import datetime, timedelta, timezone
import logging

logger = logging.getLogger(__name__)

def cleanup_token_blocklist(token_lifetime, buffer=timedelta(minutes=5), chunk_size=1000):
    """Delete blocklist entries older than the longest-lived token.

    Tokens revoked before ``now - token_lifetime - buffer`` have expired on
    their own, so their JTIs no longer need to be remembered. Deletes in
    chunks and returns the number of rows removed.
    """
    if not isinstance(token_lifetime, timedelta):
        token_lifetime = timedelta(seconds=int(token_lifetime))
    # Stored timestamps are naive UTC
    cutoff = (datetime.now(timezone.utc) - token_lifetime - buffer).replace(tzinfo=None)

    total_deleted = 0
    try:
        while True:
            id_list = [row[0] for row in db.session.query(TokenBlocklist.id).filter(
                TokenBlocklist.created_at < cutoff
            ).limit(chunk_size).all()]
            if not id_list:
                break

            total_deleted += db.session.query(TokenBlocklist).filter(
                TokenBlocklist.id.in_(id_list)
            ).delete(synchronize_session=False)
            db.session.commit()

            if len(id_list) < chunk_size:
                break
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error cleaning up token blocklist: {str(e)}", exc_info=True)
        raise

    logger.info(f"Removed {total_deleted} expired tokens from blocklist (cutoff {cutoff.isoformat()})")
    return total_deleted

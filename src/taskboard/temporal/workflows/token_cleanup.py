"""
Token Cleanup Workflow.

Purges refresh token ledger rows that expired longer ago than the retention
window. Meant to run on a Temporal schedule (e.g. hourly).
"""

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from src.taskboard.temporal.activities import purge_refresh_tokens


@workflow.defn
class TokenCleanupWorkflow:
    @workflow.run
    async def run(self, retention_hours: int = 24) -> dict[str, int]:
        """
        Args:
            retention_hours: How long expired rows are kept before deletion

        Returns:
            {"refresh_tokens": <rows deleted>}
        """
        workflow.logger.info(f"Starting token cleanup (retention: {retention_hours} hours)")

        deleted = await workflow.execute_activity(
            purge_refresh_tokens,
            retention_hours,
            start_to_close_timeout=timedelta(minutes=5),
            retry_policy=RetryPolicy(
                maximum_attempts=3,
                initial_interval=timedelta(seconds=2),
            ),
        )

        workflow.logger.info(f"Token cleanup complete: {deleted} refresh tokens deleted")
        return {"refresh_tokens": deleted}

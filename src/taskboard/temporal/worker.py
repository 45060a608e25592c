"""
Temporal Worker - Separate process from API.

Run with:
    python -m src.taskboard.temporal.worker
    python -m src.taskboard.temporal.worker --task-queue taskboard-jobs-canary
"""

import argparse
import asyncio
from collections.abc import Sequence

import uvicorn
from fastapi import FastAPI
from temporalio.client import Client
from temporalio.worker import Worker

from src.taskboard.core.config import get_settings
from src.taskboard.core.db import dispose_engine
from src.taskboard.core.logging import get_logger, setup_logging
from src.taskboard.temporal.activities import (
    find_tasks_due_for_reminder,
    mark_task_reminder_sent,
    purge_refresh_tokens,
    send_task_reminder,
)
from src.taskboard.temporal.workflows import TaskReminderWorkflow, TokenCleanupWorkflow

logger = get_logger(__name__)

WORKER_HEALTH_PORT = 8001

JOB_WORKFLOWS: list[type] = [TokenCleanupWorkflow, TaskReminderWorkflow]
JOB_ACTIVITIES: list[object] = [
    purge_refresh_tokens,
    find_tasks_due_for_reminder,
    send_task_reminder,
    mark_task_reminder_sent,
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Taskboard Temporal worker")
    parser.add_argument(
        "--task-queue",
        default=None,
        help="Task queue to poll (default: TEMPORAL_TASK_QUEUE)",
    )
    parser.add_argument(
        "--health-port",
        type=int,
        default=WORKER_HEALTH_PORT,
        help=f"Port for the health server (default: {WORKER_HEALTH_PORT})",
    )
    return parser.parse_args()


def create_worker(
    client: Client,
    task_queue: str,
    workflows: Sequence[type] = JOB_WORKFLOWS,
    activities: Sequence[object] = JOB_ACTIVITIES,
    *,
    max_concurrent_activities: int = 50,
    max_concurrent_workflow_tasks: int = 50,
) -> Worker:
    """Create a worker polling ``task_queue`` for the background jobs."""
    return Worker(
        client,
        task_queue=task_queue,
        workflows=list(workflows),
        activities=list(activities),  # type: ignore[arg-type]
        max_concurrent_activities=max_concurrent_activities,
        max_concurrent_workflow_tasks=max_concurrent_workflow_tasks,
    )


async def run_health_server(task_queue: str, port: int = WORKER_HEALTH_PORT) -> None:
    """Run a lightweight health server for K8s probes."""
    health_app = FastAPI(title="Taskboard Worker Health")

    @health_app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": "temporal-worker",
            "task_queue": task_queue,
        }

    @health_app.get("/ready")
    async def ready() -> dict[str, str]:
        return {"status": "ready"}

    config = uvicorn.Config(health_app, host="0.0.0.0", port=port, log_level="warning")
    server = uvicorn.Server(config)
    logger.info("Starting worker health server", port=port)
    await server.serve()


async def main() -> None:
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.debug)

    client = await Client.connect(
        settings.temporal_host,
        namespace=settings.temporal_namespace,
    )
    task_queue = args.task_queue or settings.temporal_task_queue
    worker = create_worker(client, task_queue)

    logger.info("Starting jobs worker", task_queue=task_queue)
    try:
        await asyncio.gather(
            worker.run(),
            run_health_server(task_queue, args.health_port),
        )
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())

# library_app/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """
    Periyodik ödünç raporu.
    - SCHEDULER_ENABLED kapalıysa (testler) hiç başlamaz.
    - Debug reloader'da çift çalışmayı engeller.
    """
    if not app.config.get("SCHEDULER_ENABLED", False):
        app.logger.info("[scheduler] Disabled by config.")
        return None

    # Werkzeug reloader varsa WERKZEUG_RUN_MAIN=true olan process gerçek process'tir
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    # circular import olmasın
    from library_app.tasks.report_job import run_borrow_report_job

    hours = int(app.config.get("REPORT_INTERVAL_HOURS", 24))
    scheduler = BackgroundScheduler(timezone="UTC")

    def _job_wrapper():
        try:
            run_borrow_report_job(app)
        except Exception as ex:
            app.logger.exception(f"[scheduler] borrow_report_job error: {ex}")

    scheduler.add_job(
        func=_job_wrapper,
        trigger=IntervalTrigger(hours=hours),
        id="borrow_report_job",
        replace_existing=True,
        max_instances=1,        # aynı job üst üste binmesin
        coalesce=True,          # kaçırılanları tek seferde toparla
        misfire_grace_time=600
    )

    scheduler.start()
    atexit.register(lambda: scheduler.shutdown(wait=False))
    app.logger.info(f"[scheduler] Borrow report job started (every {hours} hours).")

    app.extensions["apscheduler"] = scheduler
    return scheduler

# library_app/tasks/report_job.py
from datetime import datetime
from flask import current_app

from library_app.extensions import db
from library_app.repositories.user_repo import UserRepo
from library_app.services.mail_service import MailService
from library_app.services.stats_service import StatsService


def run_borrow_report_job(app):
    """
    Ödünç raporunu üretir ve tüm admin kullanıcılara mail atar.
    Sadece okur; veritabanına yazmaz.
    return: gönderilen mail sayısı
    """
    with app.app_context():
        try:
            now = datetime.utcnow()
            report = StatsService.borrow_report(now)
            admins = UserRepo.list_admins()

            subject = "Kütüphane: Ödünç raporu"
            body = MailService.render_borrow_report(report, now)

            sent = 0
            for admin in admins:
                ok, _err = MailService.send_email(admin.email, subject, body)
                if ok:
                    sent += 1

            current_app.logger.info(
                f"[report] admins={len(admins)} sent={sent} "
                f"total_borrows={report['stats']['total_borrows']} active={report['stats']['total_active_loans']}"
            )
            return sent

        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"[report] Hata: {e}")
            return 0
        finally:
            db.session.remove()

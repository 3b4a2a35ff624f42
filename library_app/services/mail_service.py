# library_app/services/mail_service.py
from __future__ import annotations

from flask import current_app
from flask_mail import Message

from library_app.extensions import mail


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            # SMTP hatası raporu durdurmamalı; çağıran sonucu loglar
            current_app.logger.warning(f"[MailService] Mail gönderilemedi ({to_email}): {e}")
            return False, str(e)

    @staticmethod
    def render_borrow_report(report: dict, generated_at) -> str:
        stats = report["stats"]
        lines = [
            "Merhaba,",
            "",
            f"Kütüphane ödünç raporu ({generated_at:%Y-%m-%d %H:%M} UTC)",
            "",
            f"Toplam ödünç: {stats['total_borrows']}",
            f"Aktif ödünç: {stats['total_active_loans']}",
            f"İade oranı: %{stats['return_rate']}",
            f"Son 7 gün ödünç: {stats['recent_borrows']}",
            f"Ortalama ödünç süresi: {stats['average_borrow_days']} gün",
            f"Son 24 saat işlem: {stats['daily_transactions']}",
        ]
        if report["top_books"]:
            lines += ["", "En çok ödünç alınan kitaplar:"]
            lines += [f"  - {b['title']} ({b['author']}): {b['count']}" for b in report["top_books"]]
        if report["top_users"]:
            lines += ["", "En aktif kullanıcılar:"]
            lines += [f"  - {u['name']} <{u['email']}>: {u['count']}" for u in report["top_users"]]
        return "\n".join(lines) + "\n"

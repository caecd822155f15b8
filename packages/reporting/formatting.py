"""Chat text rendering for reports, prices and bot replies."""

from typing import Iterable

from packages.market_rates.snapshot import RateSnapshot

from .models import PeriodReport

HELP_MESSAGE = """Không hiểu lệnh. Vui lòng nhập đúng cú pháp.
👋 Chào bạn! Tôi là Bot quản lý tài chính.

📖 *HƯỚNG DẪN SỬ DỤNG:*

1️⃣ *Ghi chép Thu / Chi (VND):*
_(Bắt buộc phải kèm lý do)_
- chi 50k ăn trưa
- thu 10m lương t10
- -10k trà đá
- +1,5m tiền lãi bank

2️⃣ *Ghi chép Tiết kiệm / Đầu tư:*
_(Chỉ nhập số tiền & đơn vị, KHÔNG ghi chú)_
- tk 2m
- tiết kiệm 100 usd
- tk 0.1 btc
- tk 5 chỉ vàng

3️⃣ *Tiện ích khác:*
- giá vàng, giá bạc
- báo cáo"""

SAVE_FAILED_MESSAGE = "❌ Lỗi hệ thống: Không thể lưu giao dịch."
BULLETIN_QUEUED_MESSAGE = "🚀 Đang chạy thử tính năng gửi Noti..."
BULLETIN_FAILED_MESSAGE = "❌ Không thể gửi bản tin thị trường."
REPORT_FAILED_MESSAGES = {
    "week": "❌ Lỗi lấy báo cáo tuần",
    "month": "❌ Lỗi lấy báo cáo tháng",
}
REPORT_TITLES = {"week": "Tuần này", "month": "Tháng này"}


def format_vnd(amount: float) -> str:
    """Whole VND with thousands separators: 1000000 -> '1,000,000'."""
    return f"{amount:,.0f}"


def format_usd(amount: float) -> str:
    """USD with two decimals: 2645.5 -> '2,645.50'."""
    return f"{amount:,.2f}"


def format_asset_qty(quantity: float) -> str:
    """Up to four decimals, trailing zeros dropped: 0.1000 -> '0.1'."""
    return f"{quantity:.4f}".rstrip("0").rstrip(".")


def _direction(diff: float) -> str:
    return "VN thấp hơn" if diff < 0 else "VN cao hơn"


def format_report_section(title: str, report: PeriodReport) -> str:
    lines = [
        f"📅 *{title}:*",
        f"   📈 Thu: {format_vnd(report.total_income)} đ",
        f"   📉 Chi: {format_vnd(report.total_expense)} đ",
        f"   🐷 Đã nạp tiết kiệm: {format_vnd(report.total_savings_vnd)} đ",
        f"   👉 Dư(Thu - Chi tiêu - Tiền đem đi cất): {format_vnd(report.balance)} đ",
    ]

    if report.expense_by_category:
        lines.append("   - Chi theo nhóm:")
        ranked = sorted(report.expense_by_category.items(), key=lambda kv: kv[1], reverse=True)
        for category, total in ranked:
            lines.append(f"     + {category.title()}: {format_vnd(total)} đ")

    scope = title.lower()
    lines.append(f"   💰 Tài sản tích lũy theo {scope}:")
    held = [(cur, asset) for cur, asset in report.assets.items() if asset.quantity > 0]
    for currency, asset in held:
        lines.append(
            f"     - {format_asset_qty(asset.quantity)} {currency} "
            f"(Tỷ giá: {format_vnd(asset.rate)}) = {format_vnd(asset.current_vnd)} đ"
        )
    if not held:
        lines.append("     (Chưa có tài sản mới)")
    lines.append(
        f"   👉 Tổng trị giá tài sản tích lũy theo {scope}: {format_vnd(report.total_assets_vnd)} đ"
    )
    return "\n".join(lines) + "\n"


def format_report_message(week: PeriodReport, month: PeriodReport) -> str:
    """Week and month sections combined into one reply."""
    return (
        "📊 BÁO CÁO TÀI CHÍNH\n\n"
        + format_report_section(REPORT_TITLES["week"], week)
        + "\n" + "-" * 20 + "\n\n"
        + format_report_section(REPORT_TITLES["month"], month)
    )


def format_gold_price(rates: RateSnapshot) -> str:
    return (
        f"🔔 TỶ GIÁ: 1 USD = {format_vnd(rates.usd_vnd)} VNĐ\n\n"
        "🏆 VÀNG (GOLD)\n"
        f"• Thế giới: {format_usd(rates.gold_usd)} USD/oz\n"
        f"• Quy đổi: {format_vnd(rates.world_gold_vnd)} đ/cây\n"
        f"• SJC (Thực tế): {format_vnd(rates.sjc_per_tael)} đ/cây\n"
        f"⚖️ Chênh lệch: {_direction(rates.gold_diff)} {format_vnd(abs(rates.gold_diff))} đ"
    )


def format_silver_price(rates: RateSnapshot) -> str:
    return (
        f"🔔 TỶ GIÁ: 1 USD = {format_vnd(rates.usd_vnd)} VNĐ\n\n"
        "🥈 BẠC (SILVER)\n"
        f"• Thế giới: {format_usd(rates.silver_usd)} USD/oz\n"
        f"• Quy đổi: {format_vnd(rates.world_silver_vnd)} đ/cây\n"
        f"• VN (Thực tế): {format_vnd(rates.vn_silver)} đ/cây\n"
        f"⚖️ Chênh lệch: {_direction(rates.silver_diff)} {format_vnd(abs(rates.silver_diff))} đ"
    )


def format_market_bulletin(rates: RateSnapshot, hour: int = 7) -> str:
    """Markdown market bulletin pushed to every user on schedule."""
    return (
        f"🔔 *BẢN TIN THỊ TRƯỜNG ({hour}H)* 🔔\n\n"
        f"🇺🇸 *USD:* {format_vnd(rates.usd_vnd)} VNĐ\n"
        f"🏆 *Vàng (TG):* {format_vnd(rates.world_gold_vnd)} VNĐ/cây\n"
        f"   _(Vàng SJC: {format_vnd(rates.sjc_per_tael)} VNĐ/cây)_\n"
        f"🥈 *Bạc (TG):* {format_vnd(rates.world_silver_vnd)} VNĐ/cây\n"
        f"🅱️ *Bitcoin:* {format_vnd(rates.btc_vnd)} VNĐ\n"
    )


def format_saved_message(saved: Iterable) -> str:
    """Confirmation listing each stored transaction as '<type> <amount> <currency>'."""
    details = [f"{tx.kind.value} {tx.amount:.2f} {tx.currency.value}" for tx in saved]
    return f"✅ Đã lưu {len(details)} giao dịch:\n" + "\n".join(details)

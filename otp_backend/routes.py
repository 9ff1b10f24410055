"""
OTP BACKEND API ROUTES - FLASK BLUEPRINT

Các JSON endpoint dùng otp_core. Server không lưu gì: mỗi request tự mang
theo secret hoặc payload đã quét.

VÍ DỤ:
curl -X POST http://localhost:5000/api/totp -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP"}'
curl -X POST http://localhost:5000/api/scan -H "Content-Type: application/json" -d '{"payload": "otpauth://totp/X?secret=JBSWY3DPEHPK3PXP"}'
curl "http://localhost:5000/api/remaining?period=30"
"""

import time

from flask import Blueprint, current_app, jsonify, request

from otp_core import config
from otp_core.errors import OtpError
from otp_core.scan import scan_text
from otp_core.engine import generate, time_remaining

otp_bp = Blueprint('otp', __name__, url_prefix='/api')


@otp_bp.errorhandler(OtpError)
def handle_otp_error(e: OtpError):
    current_app.logger.info("Request failed with %s: %s", e.kind, e)
    return jsonify({"error": str(e), "kind": e.kind}), 400


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _int_param(data: dict, key: str, default: int):
    value = data.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@otp_bp.route('/totp', methods=['POST'])
def get_totp():
    """
    LẤY MÃ TOTP HIỆN TẠI

      curl -X POST http://localhost:5000/api/totp -H "Content-Type: application/json" \
           -d '{"secret": "JBSWY3DPEHPK3PXP", "time_offset": 0, "period": 30, "digits": 6}'
    """
    data = _json_body()
    if not data or not data.get('secret'):
        return jsonify({"error": "secret is required in JSON body"}), 400

    time_offset = _int_param(data, 'time_offset', config.DEFAULT_TIME_OFFSET)
    period = _int_param(data, 'period', config.DEFAULT_TIME_STEP)
    digits = _int_param(data, 'digits', config.DEFAULT_DIGITS)
    if None in (time_offset, period, digits):
        return jsonify({"error": "time_offset, period and digits must be integers"}), 400

    timestamp = int(time.time())
    result = generate(data['secret'], time_offset, period, digits, timestamp=timestamp)
    if not result.ok:
        raise result.error

    return jsonify({
        "code": result.code,
        "counter": result.counter,
        "remaining": time_remaining(period, timestamp, time_offset),
        "period": period,
    })


@otp_bp.route('/scan', methods=['POST'])
def scan_payload():
    """
    GIẢI MÃ NỘI DUNG QR ĐÃ QUÉT

    Body: {"payload": "<text from QR decoder>", "select": 1}
    Với migration export có nhiều account: trả về toàn bộ danh sách,
    "selected" là account mặc định (account đầu tiên) hoặc account được chọn.
    """
    data = _json_body()
    if data is None:
        return jsonify({"error": "JSON data required"}), 400

    result = scan_text(data.get('payload'))
    select = _int_param(data, 'select', 1)
    if select is None or not 1 <= select <= len(result.accounts):
        return jsonify({"error": f"select must be between 1 and {len(result.accounts)}"}), 400

    return jsonify({
        "accounts": [account.to_dict() for account in result.accounts],
        "selected": result.select(select - 1).to_dict(),
        "ambiguous": result.is_ambiguous,
        "candidates": result.candidates(),
    })


@otp_bp.route('/remaining', methods=['GET'])
def get_remaining():
    """
    SỐ GIÂY CÒN LẠI CỦA MÃ HIỆN TẠI

      curl "http://localhost:5000/api/remaining?period=30"
    """
    period = request.args.get('period', config.DEFAULT_TIME_STEP, type=int)
    if not period or period <= 0:
        return jsonify({"error": "period must be a positive integer"}), 400
    return jsonify({"remaining": time_remaining(period), "period": period})

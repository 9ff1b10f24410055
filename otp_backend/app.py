"""
FLASK APP MAIN ENTRY POINT - OTP BACKEND SERVER
==================================================

Thiết lập Flask app, bật CORS và đăng ký API blueprint.

CÁC TÍNH NĂNG CHÍNH
- CORS enabled cho frontend / browser extension integration
- Routes từ otp_backend/routes.py (prefix /api)
- Trang chủ liệt kê API endpoints
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from otp_core import config
from otp_backend.routes import otp_bp

# KHỞI TẠO FLASK APP
app = Flask(__name__)
app.logger.setLevel(logging.DEBUG if config.API_DEBUG else logging.INFO)

# BẬT CORS (Cross-Origin Resource Sharing)
# Cho phép frontend (chạy trên domain/port khác) gọi API đến backend
CORS(app)

app.register_blueprint(otp_bp)


# ROOT ENDPOINT - TRANG CHỦ API
@app.route('/', methods=['GET'])
def index():
    return jsonify({
        "service": "otp-scan",
        "endpoints": {
            "POST /api/totp": "current TOTP code for a Base32 secret",
            "POST /api/scan": "decode otpauth://, otpauth-migration:// or Base32 text",
            "GET /api/remaining": "seconds until the current code rolls over",
        },
    })


def main():
    app.run(debug=config.API_DEBUG, host=config.API_HOST, port=config.API_PORT)


# KHỞI CHẠY SERVER
# Chỉ chạy khi file được execute trực tiếp (không phải import)
if __name__ == '__main__':
    main()

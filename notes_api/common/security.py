from flask import request

# API JSON uniquement: aucune ressource ne doit être chargée ni encadrée
SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'; base-uri 'none'",
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
}
HSTS = "max-age=31536000; includeSubDomains; preload"


def _is_https():
    return request.is_secure or request.headers.get("X-Forwarded-Proto", "") == "https"


def register_security_headers(app):
    @app.after_request
    def _set_security_headers(resp):
        resp.headers.update(SECURITY_HEADERS)
        # HSTS uniquement si servi en HTTPS (direct ou via reverse-proxy)
        if app.config.get("ENFORCE_HTTPS") and _is_https():
            resp.headers["Strict-Transport-Security"] = HSTS
        return resp

def device_headers(fingerprint: str) -> dict:
    return {"X-Device-Fingerprint": fingerprint}

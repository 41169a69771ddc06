import requests

# built at import, shared by threadpool workers
_session = requests.Session()
_session.headers.update({"User-Agent": "rental-availability/1.0"})


def get_http_session() -> requests.Session:
    return _session

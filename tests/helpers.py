from agrimarket.errors import ExternalServiceError
from agrimarket.services.ai_service import AIProxy


class FakePlantClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    def identify(self, image_base64):
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


class FakeCropClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    def analyze(self, image_base64):
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


class FakeAdviceClient:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.calls = 0

    def ask(self, question, context):
        self.calls += 1
        if self.error:
            raise self.error
        return self.answer


def unavailable():
    return ExternalServiceError('provider down')


def make_proxy(plant=None, crop=None, advice=None, timeout=1):
    return AIProxy(
        plant or FakePlantClient(error=unavailable()),
        crop or FakeCropClient(error=unavailable()),
        advice or FakeAdviceClient(error=unavailable()),
        timeout=timeout,
        max_workers=2,
    )


def register_payload(**overrides):
    payload = {
        'username': 'farmer42',
        'password': 'secret1',
        'fullName': 'Jane Doe',
        'age': 30,
        'region': 'Cebu',
        'userType': 'seller',
    }
    payload.update(overrides)
    return payload


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}

"""
AI proxy: plant identification and farming advice.

Each external provider is called once, on a bounded worker pool, and waited
on for at most ``timeout`` seconds. Any failure becomes an
``ExternalServiceError`` inside this module and is answered with local
fallback content; callers never see provider errors.
"""
import datetime
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError

import requests
from openai import OpenAI

from ..errors import ExternalServiceError, ValidationError
from .knowledge_base import (
    MANUAL_IDENTIFICATION_TIPS, assess_plant_health, fallback_advice, treatment_advice,
)

logger = logging.getLogger(__name__)

ADVICE_SYSTEM_PROMPT = (
    "You are an agricultural extension officer helping small farmers in {region}. "
    "Give practical, concise advice on crops, soil, pests and farm management."
)


class PlantIdClient:
    """Plant.id v2 identification API."""

    def __init__(self, api_key, url, timeout):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    def identify(self, image_base64):
        if not self.api_key:
            raise ExternalServiceError('Plant.id API key not configured')
        payload = {
            'api_key': self.api_key,
            'images': [image_base64],
            'modifiers': ['crops_fast'],
            'plant_details': ['common_names', 'url', 'description', 'treatment'],
            'disease_details': ['common_names', 'url', 'description', 'treatment'],
        }
        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise ExternalServiceError(f'Plant.id request failed: {e}')


class CropHealthClient:
    """Crop.health analysis API, used to enrich a successful identification."""

    def __init__(self, api_key, url, timeout):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    def analyze(self, image_base64):
        if not self.api_key:
            raise ExternalServiceError('Crop.health API key not configured')
        try:
            response = requests.post(
                self.url,
                json={'image': image_base64, 'features': ['disease', 'pest', 'deficiency']},
                headers={'Authorization': f'Bearer {self.api_key}'},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise ExternalServiceError(f'Crop.health request failed: {e}')

        analysis = data.get('analysis') if isinstance(data, dict) else None
        if not analysis:
            raise ExternalServiceError('Crop.health returned no analysis')
        return {
            'success': True,
            'api': 'crop.health',
            'diseases': analysis.get('diseases') or [],
            'pests': analysis.get('pests') or [],
            'deficiencies': analysis.get('nutrient_deficiencies') or [],
            'healthScore': analysis.get('health_score'),
            'recommendations': analysis.get('recommendations') or [],
        }


class AdviceClient:
    """OpenAI chat model answering farming questions."""

    def __init__(self, api_key, model, timeout):
        self.model = model
        self._client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0) if api_key else None

    def ask(self, question, context):
        if self._client is None:
            raise ExternalServiceError('OpenAI API key not configured')
        region = context.get('region') or 'the Philippines'
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": ADVICE_SYSTEM_PROMPT.format(region=region)},
                    {"role": "user", "content": question},
                ],
                temperature=0.7,
                max_tokens=500,
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise ExternalServiceError(f'OpenAI request failed: {e}')
        if not content or not content.strip():
            raise ExternalServiceError('OpenAI returned an empty answer')
        return content.strip()


def format_identification(suggestion):
    details = suggestion.get('plant_details') or {}
    diseases = suggestion.get('diseases') or []
    probability = suggestion.get('probability') or 0
    return {
        'success': True,
        'api': 'plant.id',
        'plantName': suggestion.get('plant_name'),
        'confidence': f"{probability * 100:.1f}%",
        'commonNames': details.get('common_names') or [],
        'scientificName': details.get('scientific_name'),
        'description': details.get('description') or '',
        'diseases': diseases,
        'treatment': treatment_advice(diseases, details.get('treatment')),
        'healthAssessment': assess_plant_health(diseases),
        'similarImages': suggestion.get('similar_images') or [],
    }


def not_recognized(message):
    return {
        'success': False,
        'message': message,
        'fallback': MANUAL_IDENTIFICATION_TIPS,
    }


class AIProxy:
    def __init__(self, plant_client, crop_client, advice_client, timeout=10, max_workers=4):
        self.plant_client = plant_client
        self.crop_client = crop_client
        self.advice_client = advice_client
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='ai-proxy')

    @classmethod
    def from_config(cls, config):
        timeout = config['AI_TIMEOUT']
        return cls(
            PlantIdClient(config['PLANT_ID_API_KEY'], config['PLANT_ID_URL'], timeout),
            CropHealthClient(config['CROP_HEALTH_API_KEY'], config['CROP_HEALTH_URL'], timeout),
            AdviceClient(config['OPENAI_API_KEY'], config['OPENAI_MODEL'], timeout),
            timeout=timeout,
            max_workers=config['AI_MAX_WORKERS'],
        )

    def _call(self, fn, *args):
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            raise ExternalServiceError(f'{getattr(fn, "__qualname__", fn)} timed out after {self.timeout}s')
        except ExternalServiceError:
            raise
        except Exception as e:
            raise ExternalServiceError(str(e))

    def detect_disease(self, image_base64):
        if not image_base64:
            raise ValidationError('Image is required')

        try:
            data = self._call(self.plant_client.identify, image_base64)
        except ExternalServiceError as e:
            logger.warning(f"Plant identification unavailable: {e}")
            return not_recognized('Plant analysis service unavailable')

        suggestions = data.get('suggestions') if isinstance(data, dict) else None
        if not suggestions:
            return not_recognized('Plant not recognized by Plant.id')

        result = format_identification(suggestions[0])
        try:
            crop_health = self._call(self.crop_client.analyze, image_base64)
        except ExternalServiceError as e:
            logger.info(f"Crop.health enrichment skipped: {e}")
        else:
            result['cropHealth'] = crop_health
            result['recommendations'] = crop_health['recommendations']
        return result

    def farming_advice(self, question, context=None):
        if not isinstance(question, str) or not question.strip():
            raise ValidationError(details=[{'field': 'question', 'message': 'Question is required'}])
        context = context if isinstance(context, dict) else {}

        try:
            response = self._call(self.advice_client.ask, question, context)
            source = 'openai'
        except ExternalServiceError as e:
            logger.info(f"Using local farming knowledge base: {e}")
            response = fallback_advice(question, context)
            source = 'knowledge_base'

        return {
            'success': True,
            'question': question,
            'response': response,
            'context': context,
            'source': source,
            'timestamp': datetime.datetime.now(datetime.timezone.utc).isoformat(),
        }

    def shutdown(self):
        self._executor.shutdown(wait=False)

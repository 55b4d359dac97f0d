from flask_restx import Namespace, Resource, fields
from flask import current_app

from agrimarket.utils.validators import get_json_body

ai_ns = Namespace('ai', description='Plant disease detection and farming advice', path='/ai')

detect_model = ai_ns.model('DetectDisease', {
    'imageBase64': fields.String(required=True, description='Base64 encoded plant photo'),
})

advice_model = ai_ns.model('FarmingAdvice', {
    'question': fields.String(required=True, description='Farming question'),
    'context': fields.Raw(description='Optional context, e.g. {"region": "Benguet"}'),
})


def get_ai_proxy():
    return current_app.extensions['ai_proxy']


@ai_ns.route('/detect-disease')
class DetectDisease(Resource):
    @ai_ns.expect(detect_model)
    @ai_ns.response(200, 'Identification result, or manual identification tips')
    @ai_ns.response(400, 'Image is required')
    def post(self):
        """Identify a plant and its diseases from a photo"""
        data = get_json_body()
        return get_ai_proxy().detect_disease(data.get('imageBase64')), 200


@ai_ns.route('/farming-advice')
class FarmingAdvice(Resource):
    @ai_ns.expect(advice_model)
    @ai_ns.response(400, 'Question is required')
    def post(self):
        """Ask a farming question"""
        data = get_json_body()
        return get_ai_proxy().farming_advice(data.get('question'), data.get('context')), 200

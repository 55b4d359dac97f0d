from flask_restx import Namespace, Resource

from ..repositories import get_user_repository, get_product_repository
from ..services.stats_service import get_stats

stats_ns = Namespace('stats', description='Marketplace statistics', path='/stats')


@stats_ns.route('')
class MarketplaceStats(Resource):
    def get(self):
        """Get user and product totals, recent users and top-rated products"""
        return get_stats(get_user_repository(), get_product_repository()), 200

from agrimarket import db


class Product(db.Model):
    __tablename__ = 'product'
    id = db.Column(db.String(32), primary_key=True)
    seller_id = db.Column(db.String(32), db.ForeignKey('user.id'), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    price_per_kg = db.Column(db.Float, nullable=False)
    stock = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(50), nullable=False, default='general')
    # Seller snapshot taken at listing time; not kept in sync with the user
    seller_full_name = db.Column(db.String(120))
    seller_username = db.Column(db.String(80))
    seller_region = db.Column(db.String(120))
    seller_avatar = db.Column(db.String(16))
    location = db.Column(db.JSON)
    images = db.Column(db.JSON)
    tags = db.Column(db.JSON)
    rating = db.Column(db.Float, nullable=False, default=0)
    review_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False)
    updated_at = db.Column(db.DateTime, nullable=False)

    def __repr__(self):
        return f'<Product {self.title}>'

# Local farming knowledge used when the AI providers are unavailable.
# Lookups are plain data: keyword -> text, first match in table order wins.

DEFAULT_REGION = 'Philippines'

TOMATO_ADVICE = """🍅 **Tomato Growing Guide ({region}):**

**Best Varieties:** Diamante Max, Apollo, Improved Pope
**Planting Season:** October-January (dry season)
**Spacing:** 50-60cm between plants
**Fertilizer:**
• Basal: 10-15 tons compost/hectare + complete fertilizer
• Side dress: Urea every 3-4 weeks

**Common Issues & Solutions:**
• Blossom end rot - Add calcium, maintain even moisture
• Early blight - Remove infected leaves, use copper fungicide
• Fruit worms - Handpick or use BT insecticide
• Yellow leaves - Check for nutrient deficiency or overwatering

**Smart Tips:**
• Use stakes or trellises for support
• Mulch to conserve moisture and control weeds
• Rotate crops annually to prevent disease buildup"""

RICE_ADVICE = """🌾 **Rice Farming Guide ({region}):**

**Popular Varieties:** IR64, PSB Rc18, NSIC Rc222
**Planting Seasons:**
• Wet season: June-July
• Dry season: November-December

**Water Management:**
• Maintain 2-5cm water depth during vegetative stage
• Drain field 1-2 weeks before harvest

**Fertilizer Schedule:**
• Basal: 4-6 bags complete (14-14-14)/hectare
• Top dress: 2-3 bags urea at tillering and panicle initiation

**Pest Management:**
• Rice bugs - Use light traps, harvest early
• Stem borers - Plant resistant varieties
• Blast disease - Avoid excessive nitrogen"""

PEST_ADVICE = """🐛 **Organic Pest Control Methods:**

**Natural Solutions:**
• Neem oil spray - Effective against most insects
• Chili-garlic spray - For aphids and mites
• Wood ash - Deters crawling insects
• Companion planting - Marigolds repel nematodes

**Biological Control:**
• Ladybugs - Eat aphids
• Praying mantis - General predator
• Trichoderma - Fungal disease control

**Prevention:**
• Keep field clean of plant debris
• Practice crop rotation
• Use resistant varieties
• Monitor plants regularly"""

SOIL_ADVICE = """🌱 **Soil Health Management:**

**Soil Testing:**
• Test pH annually (ideal: 5.5-6.5 for most crops)
• Check NPK levels and organic matter

**Improvement Methods:**
• Add compost (2-3 kg/m²)
• Use green manure (legumes)
• Apply lime if acidic, sulfur if alkaline
• Practice minimum tillage

**Organic Matter:**
• Target 3-5% organic matter
• Use crop residues as mulch
• Apply well-decomposed manure"""

GENERAL_ADVICE = """🌾 **AgriMarket Farming Advice:**

I understand you need help with: "{question}"

**General Best Practices:**
• Always use certified seeds from reputable sources
• Test soil before planting
• Practice crop rotation
• Monitor weather patterns
• Keep farming records

**For Specific Advice:**
• Consult your local Agricultural Extension Office
• Visit the Department of Agriculture website
• Join farmers' associations in your area

**Remember:** Good farming practices combined with timely action lead to better yields!"""

ADVICE_TOPICS = (
    ('tomato', TOMATO_ADVICE),
    ('rice', RICE_ADVICE),
    ('pest', PEST_ADVICE),
    ('soil', SOIL_ADVICE),
)

DISEASE_TREATMENTS = (
    ('powdery mildew', 'Apply neem oil or sulfur-based fungicide. Improve air circulation.'),
    ('leaf spot', 'Remove affected leaves. Use copper-based fungicide.'),
    ('blight', 'Apply appropriate fungicide. Avoid overhead watering.'),
    ('rust', 'Use fungicide and remove infected plant parts.'),
    ('mosaic', 'Remove infected plants. Control insect vectors.'),
    ('rot', 'Improve drainage. Reduce watering. Apply fungicide.'),
    ('wilt', 'Check soil moisture. Improve drainage.'),
    ('spot', 'Remove affected leaves. Apply fungicide.'),
    ('mildew', 'Improve air circulation. Apply fungicide.'),
)
DEFAULT_TREATMENT = 'Consult local agricultural expert for specific treatment.'
UNKNOWN_DISEASE_TREATMENT = 'Monitor plant health and maintain good practices.'

SEVERE_DISEASE_KEYWORDS = ('blight', 'rot', 'virus')

HEALTH_STATUSES = {
    'healthy': {'status': 'Healthy', 'emoji': '✅', 'description': 'No diseases detected'},
    'critical': {'status': 'Critical', 'emoji': '🚨', 'description': 'Immediate treatment needed'},
    'poor': {'status': 'Poor', 'emoji': '⚠️', 'description': 'Multiple issues detected'},
    'attention': {'status': 'Needs Attention', 'emoji': '🔍', 'description': 'Minor issues detected'},
}

HEALTHY_PLANT_MESSAGE = 'No diseases detected. Your plant appears healthy! 🌱'

MANUAL_IDENTIFICATION_TIPS = """**🔍 Manual Plant Identification Tips:**

**Take Clear Photos Of:**
• Leaves (upper and lower surfaces)
• Stems and branches
• Flowers or fruits
• Overall plant structure

**Common Philippine Plant Issues:**

**🍅 Tomato Problems:**
• Yellow leaves: Nutrient deficiency or overwatering
• Brown spots: Fungal infection
• Wilting: Root issues or water stress

**🌾 Rice Issues:**
• Yellowing: Nitrogen deficiency
• Brown spots: Fungal disease
• Stunted growth: Soil or water issue

**Next Steps:**
1. Take multiple clear photos
2. Note symptoms and patterns
3. Check soil condition
4. Consult local agricultural expert

**Emergency Contact:**
• Local Agricultural Office
• DA Hotline: 0920-946-2474"""


def fallback_advice(question, context=None):
    """Deterministic advice text for ``question``."""
    region = (context or {}).get('region') or DEFAULT_REGION
    lower_question = question.lower()
    for keyword, template in ADVICE_TOPICS:
        if keyword in lower_question:
            return template.format(region=region)
    return GENERAL_ADVICE.format(question=question)


def disease_treatment(disease_name):
    if not disease_name:
        return UNKNOWN_DISEASE_TREATMENT
    lower_name = disease_name.lower()
    for keyword, treatment in DISEASE_TREATMENTS:
        if keyword in lower_name:
            return treatment
    return DEFAULT_TREATMENT


def assess_plant_health(diseases):
    if not diseases:
        return dict(HEALTH_STATUSES['healthy'])
    severe = [
        d for d in diseases
        if d.get('name') and any(k in d['name'].lower() for k in SEVERE_DISEASE_KEYWORDS)
    ]
    if severe:
        return dict(HEALTH_STATUSES['critical'])
    if len(diseases) > 2:
        return dict(HEALTH_STATUSES['poor'])
    return dict(HEALTH_STATUSES['attention'])


def treatment_advice(diseases, plant_treatment=None):
    if not diseases:
        return HEALTHY_PLANT_MESSAGE

    lines = ['**🦠 Detected Issues & Solutions:**']
    for disease in diseases:
        name = disease.get('name')
        lines.append(f"• **{name}**: {disease_treatment(name)}")
        details = disease.get('disease_details') or {}
        treatment = details.get('treatment')
        if isinstance(treatment, dict) and treatment.get('description'):
            lines.append(f"  💡 {treatment['description']}")

    if isinstance(plant_treatment, dict) and plant_treatment.get('description'):
        lines.extend(['', '**🌱 General Plant Care:**', plant_treatment['description']])

    return '\n'.join(lines)

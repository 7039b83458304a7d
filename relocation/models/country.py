from sqlalchemy import Column, Integer, String, Text, Float

from .base import Base


class RecCountry(Base):
    __tablename__ = "rec_countries"

    id = Column(Integer, primary_key=True)
    code = Column(String(3), unique=True, nullable=False)
    name = Column(String, nullable=False)
    short_note = Column(Text)

    # Core baseline scores (0-10)
    tax_score = Column(Float, nullable=False)
    cost_of_living_score = Column(Float, nullable=False)
    income_growth_score = Column(Float, nullable=False)
    remote_friendly_score = Column(Float, nullable=False)
    safety_score = Column(Float, nullable=False)
    lifestyle_score = Column(Float, nullable=False)

    # Optional scores, NULL when unknown
    cold_climate_score = Column(Float)
    warm_climate_score = Column(Float)
    mild_climate_score = Column(Float)
    english_score = Column(Float)
    expat_scene_score = Column(Float)
    social_scene_score = Column(Float)
    lgbt_score = Column(Float)
    healthcare_score = Column(Float)
    public_transport_score = Column(Float)
    digital_services_score = Column(Float)
    infrastructure_clean_score = Column(Float)

    net_income_percent_typical = Column(Float)

    # Meta
    data_source = Column(String)

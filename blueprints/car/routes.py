# blueprints/car/routes.py
from __future__ import annotations
import logging

from flask import Blueprint, jsonify, request
from flask_login import login_required

from blueprints.auth.routes import admin_required
from .schemas import CarDetailsIn, CarLocationIn
from .services import CarLocationStore, car_details, update_car_details

log = logging.getLogger(__name__)

api_bp = Blueprint("car_api", __name__)

@api_bp.get("/car")
@login_required
def car_get():
    return jsonify(car_details())

@api_bp.put("/car")
@admin_required
def car_update():
    parsed = CarDetailsIn.model_validate(request.get_json(silent=True) or {})
    data = update_car_details(parsed)
    log.info("car details updated", extra={"event": "car_details_updated"})
    return jsonify(data)

@api_bp.get("/car/location")
@login_required
def car_location_get():
    loc = CarLocationStore().latest()
    return jsonify({"location": loc.to_dict() if loc else None})

@api_bp.post("/car/location")
@login_required
def car_location_save():
    parsed = CarLocationIn.model_validate(request.get_json(silent=True) or {})
    loc = CarLocationStore().save(parsed.latitude, parsed.longitude, parsed.description)
    return jsonify({"ok": True, "location": loc.to_dict()}), 201

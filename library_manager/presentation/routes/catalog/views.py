from flask import jsonify
from flask_wtf.csrf import generate_csrf
from library_manager.presentation.routes.catalog import catalog_bp
from library_manager.services.circulation.circulation_service import CirculationService


@catalog_bp.get('/<int:asset_id>')
def detail(asset_id):
    """Asset detail with checkout history, current patron and holds"""
    return jsonify(CirculationService().asset_detail(asset_id))


@catalog_bp.get('/<int:asset_id>/checkout')
def checkout(asset_id):
    model = CirculationService().checkout_model(asset_id)
    # Token to send back as X-CSRFToken / csrf_token with the POST
    model['csrf_token'] = generate_csrf()
    return jsonify(model)


@catalog_bp.get('/<int:asset_id>/hold')
def hold(asset_id):
    model = CirculationService().hold_model(asset_id)
    model['csrf_token'] = generate_csrf()
    return jsonify(model)

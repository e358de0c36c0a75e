from flask import jsonify, redirect, request, url_for
from library_manager.presentation.routes.catalog import catalog_bp, logger
from library_manager.buisness.circulation.manager import CirculationManager


def _read_ids(*names):
    """
    Read integer ids from a JSON or form body.

    Returns:
        tuple: (values dict, None) or (None, error response)
    """
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            logger.warning("Rejected circulation request: JSON body is not an object")
            return None, (jsonify({'error': 'request body must be a JSON object'}), 400)
    else:
        data = request.form

    values = {}
    for name in names:
        raw = data.get(name)
        try:
            if isinstance(raw, (bool, float)):
                raise TypeError(name)
            values[name] = int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Rejected circulation request with invalid {name}: {raw!r}")
            return None, (jsonify({'error': f'{name} must be an integer'}), 400)
    return values, None


@catalog_bp.route('/checkout', methods=['POST'])
def place_checkout():
    values, error = _read_ids('asset_id', 'library_card_id')
    if error:
        return error

    CirculationManager.from_app_config().checkout_item(values['asset_id'], values['library_card_id'])
    return redirect(url_for('catalog.detail', asset_id=values['asset_id']))


@catalog_bp.route('/hold', methods=['POST'])
def place_hold():
    values, error = _read_ids('asset_id', 'library_card_id')
    if error:
        return error

    CirculationManager.from_app_config().place_hold(values['asset_id'], values['library_card_id'])
    return redirect(url_for('catalog.detail', asset_id=values['asset_id']))


@catalog_bp.route('/<int:asset_id>/check-in', methods=['POST'])
def check_in(asset_id):
    CirculationManager.from_app_config().check_in_item(asset_id)
    return redirect(url_for('catalog.detail', asset_id=asset_id))


@catalog_bp.route('/<int:asset_id>/mark-lost', methods=['POST'])
def mark_lost(asset_id):
    CirculationManager.from_app_config().mark_lost(asset_id)
    return redirect(url_for('catalog.detail', asset_id=asset_id))


@catalog_bp.route('/<int:asset_id>/mark-found', methods=['POST'])
def mark_found(asset_id):
    CirculationManager.from_app_config().mark_found(asset_id)
    return redirect(url_for('catalog.detail', asset_id=asset_id))

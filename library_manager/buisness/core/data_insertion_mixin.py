"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods used by debug data insertion and the JSON read models.
"""

from library_manager import db
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import inspect
from library_manager.utils.logger import get_logger

logger = get_logger("library_manager.domain.core.data_insertion")


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    - bulk_create_from_dicts(): Create multiple instances from list of dictionaries
    """

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        mapper = inspect(cls)
        columns = {c.key for c in mapper.column_attrs}

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            if key in ['created_at', 'updated_at'] and value is None:
                # Let column defaults fill timestamps
                continue
            filtered_data[key] = value

        return cls(**filtered_data)

    def to_dict(self, include_audit_fields=True):
        """
        Convert model instance to dictionary

        Args:
            include_audit_fields (bool): Whether to include created_at/updated_at

        Returns:
            dict: Dictionary representation of the model
        """
        result = {}
        mapper = inspect(self.__class__)

        for attr in mapper.column_attrs:
            if not include_audit_fields and attr.key in ['created_at', 'updated_at', 'version_id']:
                continue

            value = getattr(self, attr.key)
            if isinstance(value, (datetime, date)):
                result[attr.key] = value.isoformat()
            elif isinstance(value, Decimal):
                result[attr.key] = str(value)
            else:
                result[attr.key] = value

        return result

    @classmethod
    def bulk_create_from_dicts(cls, data_list, skip_fields=None, commit=True):
        """
        Create multiple model instances from list of dictionaries

        Args:
            data_list (list): List of dictionaries containing model data
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction

        Returns:
            list: List of created model instances
        """
        instances = []

        for data_dict in data_list:
            instance = cls.from_dict(data_dict, skip_fields)
            instances.append(instance)
            db.session.add(instance)

        try:
            if commit:
                db.session.commit()
                logger.info(f"Created {len(instances)} {cls.__name__} instances")
            else:
                db.session.flush()
            return instances
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error bulk creating {cls.__name__}: {e}")
            raise

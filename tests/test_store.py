# tests/test_store.py
"""Record store: error translation and rollback when the database fails."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from unit_registry.errors import RecordNotFound, StoreAccessError
from unit_registry.services.query import Constraint, Op
from unit_registry.services.store import RecordStore


class TestStoreFailures:
    def test_read_failure_rolls_back(self):
        db = MagicMock()
        db.query.return_value.order_by.return_value.all.side_effect = SQLAlchemyError("connection lost")

        with pytest.raises(StoreAccessError) as exc:
            RecordStore(db, "vehicles").find([Constraint("registration_number", Op.ORDER_DESC)])

        db.rollback.assert_called_once()
        assert exc.value.message == "Erro ao buscar veículos"
        assert exc.value.status_code == 503

    def test_get_failure(self):
        db = MagicMock()
        db.get.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(StoreAccessError) as exc:
            RecordStore(db, "assets").get("abc")

        db.rollback.assert_called_once()
        assert exc.value.message == "Erro ao buscar patrimônios"

    def test_create_failure_rolls_back(self):
        db = MagicMock()
        db.commit.side_effect = SQLAlchemyError("disk full")

        with pytest.raises(StoreAccessError) as exc:
            RecordStore(db, "events").create(title="OS")

        db.add.assert_called_once()
        db.rollback.assert_called_once()
        db.refresh.assert_not_called()
        assert exc.value.message == "Erro ao salvar ordens de serviço"

    def test_delete_failure_rolls_back(self):
        db = MagicMock()
        db.commit.side_effect = SQLAlchemyError("locked")

        with pytest.raises(StoreAccessError) as exc:
            RecordStore(db, "vehicles").delete(MagicMock(id="v1"))

        db.rollback.assert_called_once()
        assert exc.value.message == "Erro ao excluir veículos"

    def test_missing_record(self):
        db = MagicMock()
        db.get.return_value = None
        with pytest.raises(RecordNotFound):
            RecordStore(db, "vehicles").require("missing")

    def test_unsupported_operator_is_not_pushed(self):
        with pytest.raises(ValueError):
            RecordStore(MagicMock(), "vehicles").find([Constraint("plate", Op.CONTAINS, "A")])

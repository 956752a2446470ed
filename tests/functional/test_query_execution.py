"""
End-to-end tests running queries through ModelDAO against SQLite.
"""

import pytest

from torm.common.base_dao import ModelDAO
from torm.core.exceptions import ModelNotFoundError, WrongMethodInvokedError
from torm.query.operator import Operator
from torm.query.schemas import CompiledQuery, Record


class TestFindAll:
    """Test full-row queries"""

    async def test_find_all_returns_entities(self, registry, sample_widgets, widget_model):
        widgets = await registry.query(widget_model).find_all()

        assert [w.name for w in widgets] == ["Sprocket", "Flange", "Gear", "Bolt"]
        assert all(isinstance(w, widget_model) for w in widgets)

    async def test_where_equality_and_pagination(self, registry, sample_widgets, widget_model):
        widgets = await registry.query(widget_model).where({"status": "active"}).limit(1).offset(1).find_all()

        assert [w.id for w in widgets] == [2]

    async def test_last_where_value_wins(self, registry, sample_widgets, widget_model):
        widgets = await (
            registry.query(widget_model).where({"status": "active"}).where({"status": "pending"}).find_all()
        )

        assert [w.name for w in widgets] == ["Gear"]

    async def test_zero_limit_returns_nothing(self, registry, sample_widgets, widget_model):
        assert await registry.query(widget_model).limit(0).find_all() == []

    async def test_operator_conditions(self, registry, sample_widgets, widget_model):
        widgets = await (
            registry.query(widget_model)
            .where(Operator.gte("price", 2.5) & Operator.lt("price", 10))
            .where(Operator.ne("status", "retired"))
            .find_all()
        )

        assert sorted(w.name for w in widgets) == ["Gear", "Sprocket"]

    async def test_membership_and_null_conditions(self, registry, sample_widgets, widget_model):
        in_list = await registry.query(widget_model).where({"id": [1, 4]}).find_all()
        nulls = await registry.query(widget_model).where({"description": None}).find_all()
        not_in = await registry.query(widget_model).where(Operator.not_in("id", [1, 2, 3])).find_all()

        assert [w.id for w in in_list] == [1, 4]
        assert [w.id for w in nulls] == [3]
        assert [w.id for w in not_in] == [4]

    async def test_like_and_between(self, registry, sample_widgets, widget_model):
        like = await registry.query(widget_model).where(Operator.like("name", "%e%")).find_all()
        between = await registry.query(widget_model).where(Operator.between("price", (1, 8))).find_all()

        assert sorted(w.name for w in like) == ["Flange", "Gear", "Sprocket"]
        assert sorted(w.name for w in between) == ["Gear", "Sprocket"]

    async def test_read_model_conversion(self, db_session, sample_widgets, widget_model, widget_read_model):
        dao = ModelDAO(db_session, widget_model, widget_read_model)

        rows = await dao.find_all(CompiledQuery(where={"id": 1}))

        assert rows == [widget_read_model(id=1, name="Sprocket", price=2.5, status="active")]


class TestFind:
    """Test projected and excluded queries"""

    async def test_columns_with_alias(self, registry, sample_widgets, widget_model):
        rows = await registry.query(widget_model).column("name").column("price", "cost").where({"id": 2}).find()

        assert rows == [Record(values={"name": "Flange", "cost": 10.0})]

    async def test_exclude_wins_over_column(self, registry, sample_widgets, widget_model):
        rows = await registry.query(widget_model).column("price").not_("description").limit(10).find()

        assert len(rows) == 4
        assert set(rows[0].values) == {"id", "name", "price", "status"}

    async def test_unknown_column_raises(self, registry, sample_widgets, widget_model):
        with pytest.raises(ValueError, match="Column 'weight' does not exist"):
            await registry.query(widget_model).column("weight").find()

    async def test_unknown_exclude_raises(self, registry, sample_widgets, widget_model):
        with pytest.raises(ValueError):
            await registry.query(widget_model).not_("weight").find()

    async def test_wrong_method(self, registry, widget_model):
        with pytest.raises(WrongMethodInvokedError):
            await registry.query(widget_model).find()


class TestCount:
    """Test aggregate counting"""

    async def test_count_all(self, registry, sample_widgets, widget_model):
        assert await registry.query(widget_model).count() == 4

    async def test_count_column_skips_nulls(self, registry, sample_widgets, widget_model):
        assert await registry.query(widget_model).count("description", "described") == 3

    async def test_count_ignores_where(self, registry, sample_widgets, widget_model):
        assert await registry.query(widget_model).where({"status": "active"}).count() == 4

    async def test_count_empty_table(self, registry, gadget_model):
        assert await registry.query(gadget_model).count() == 0

    async def test_count_unregistered(self, registry, widget_model):
        registry.unregister(widget_model)

        with pytest.raises(ModelNotFoundError):
            await registry.query(widget_model).count()

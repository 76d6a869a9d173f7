# tests/test_reducer_steps.py
import random

import pytest

from conftest import assert_contiguous_order, make_block
from dripflow.models import (
    AfterDelayTrigger,
    DelayUnit,
    DripTriggerType,
    FlowState,
    ManualOnlyTrigger,
    OnEntryTrigger,
)
from dripflow.services import reducer


def _steps(state: FlowState, block_id: str = "blk"):
    return state.get_block(block_id).steps


def test_delete_middle_step_renumbers(state):
    """[S1, S2, S3] - S2 -> [S1(1), S3(2)]"""
    new = reducer.delete_step(state, "blk", "S2")
    assert [(s.id, s.order) for s in _steps(new)] == [("S1", 1), ("S3", 2)]


def test_add_step_after_first():
    state = FlowState(blocks=(make_block(n_steps=2),))
    new = reducer.add_step(state, "blk", after_step_id="S1", step_id="NEW")
    assert [(s.id, s.order) for s in _steps(new)] == [("S1", 1), ("NEW", 2), ("S2", 3)]


def test_add_step_appends_by_default_with_placeholder_content(state):
    new = reducer.add_step(state, "blk")
    added = _steps(new)[-1]
    assert added.order == 4
    assert added.title == "New Step"
    assert added.subject == "New Message Subject"
    assert added.body == "Enter your message content here..."
    assert added.is_enabled is True
    assert added.customers == ()
    assert added.id.startswith("step_")


def test_add_step_uses_first_allowed_trigger(state):
    new = reducer.add_step(state, "blk")
    assert _steps(new)[-1].trigger == OnEntryTrigger()
    new = reducer.add_step(state, "manual_blk")
    assert _steps(new, "manual_blk")[-1].trigger == ManualOnlyTrigger()


def test_add_step_falls_back_to_manual_when_no_triggers_allowed():
    state = FlowState(blocks=(make_block(allowed=()),))
    new = reducer.add_step(state, "blk")
    assert _steps(new)[-1].trigger.type == DripTriggerType.manual_only


def test_add_step_unknown_after_id_appends(state):
    new = reducer.add_step(state, "blk", after_step_id="nope", step_id="NEW")
    assert [s.id for s in _steps(new)] == ["S1", "S2", "S3", "NEW"]


def test_unknown_block_is_a_noop(state):
    assert reducer.add_step(state, "missing") is state
    assert reducer.delete_step(state, "missing", "S1") is state
    assert reducer.update_step(state, "missing", "S1", title="x") is state
    assert reducer.reorder_steps(state, "missing", 0, 1) is state


def test_unknown_step_is_a_noop(state):
    assert reducer.delete_step(state, "blk", "nope") is state
    assert reducer.duplicate_step(state, "blk", "nope") is state
    assert reducer.toggle_step_enabled(state, "blk", "nope") is state
    assert reducer.update_step(state, "blk", "nope", title="x") is state


def test_update_step_merges_only_given_fields(state):
    before = state.get_block("blk").get_step("S2")
    new = reducer.update_step(state, "blk", "S2", title="Renamed", subject="Hello {{first_name}}")
    after = new.get_block("blk").get_step("S2")
    assert after.title == "Renamed"
    assert after.subject == "Hello {{first_name}}"
    assert after.body == before.body
    assert after.trigger == before.trigger
    assert after.order == before.order


def test_update_step_accepts_trigger_dict(state):
    new = reducer.update_step(state, "blk", "S1", trigger={"type": "after_delay", "delay_value": 3, "delay_unit": "days"})
    assert new.get_block("blk").get_step("S1").trigger == AfterDelayTrigger(delay_value=3, delay_unit=DelayUnit.days)


def test_update_step_trigger_shorthand(state):
    trigger = AfterDelayTrigger(delay_value=24)
    new = reducer.update_step_trigger(state, "blk", "S3", trigger)
    assert new.get_block("blk").get_step("S3").trigger == trigger


def test_update_step_rejects_structural_fields(state):
    with pytest.raises(TypeError):
        reducer.update_step(state, "blk", "S1", order=5)


def test_update_with_same_values_is_a_noop(state):
    assert reducer.update_step(state, "blk", "S1", title="Step 1") is state


def test_changes_refresh_block_updated_at(state):
    new = reducer.toggle_step_enabled(state, "blk", "S1")
    assert new.get_block("blk").updated_at > state.get_block("blk").updated_at
    # untouched blocks are shared
    assert new.get_block("manual_blk") is state.get_block("manual_blk")


def test_toggle_step_enabled_flips(state):
    once = reducer.toggle_step_enabled(state, "blk", "S2")
    assert once.get_block("blk").get_step("S2").is_enabled is False
    twice = reducer.toggle_step_enabled(once, "blk", "S2")
    assert twice.get_block("blk").get_step("S2").is_enabled is True


def test_duplicate_clears_customers_and_suffixes_title(state):
    new = reducer.duplicate_step(state, "blk", "S1", new_step_id="S1c")
    steps = _steps(new)
    assert [s.id for s in steps] == ["S1", "S1c", "S2", "S3"]
    original, copy = steps[0], steps[1]
    assert copy.title == "Step 1 (Copy)"
    assert copy.customers == ()
    assert original.customers  # source keeps its customers
    assert copy.body == original.body
    assert copy.trigger == original.trigger
    assert copy.is_enabled == original.is_enabled
    assert_contiguous_order(new.get_block("blk"))


def test_duplicate_generates_fresh_id(state):
    new = reducer.duplicate_step(state, "blk", "S3")
    copy = _steps(new)[-1]
    assert copy.id != "S3"
    assert copy.title.endswith("(Copy)")


def test_delete_selected_step_clears_selection(state):
    state = reducer.select_step(reducer.select_block(state, "blk"), "S2")
    new = reducer.delete_step(state, "blk", "S2")
    assert new.selection.block_id == "blk"
    assert new.selection.step_id is None


def test_delete_other_step_keeps_selection(state):
    state = reducer.select_step(reducer.select_block(state, "blk"), "S1")
    new = reducer.delete_step(state, "blk", "S3")
    assert new.selection.step_id == "S1"


@pytest.mark.parametrize(
    "src,dst,expected",
    [
        (0, 2, ["S2", "S3", "S1"]),
        (2, 0, ["S3", "S1", "S2"]),
        (1, 99, ["S1", "S3", "S2"]),   # to_index clamped to the end
        (2, -5, ["S3", "S1", "S2"]),   # to_index clamped to the start
    ],
)
def test_reorder_steps(state, src, dst, expected):
    new = reducer.reorder_steps(state, "blk", src, dst)
    assert [s.id for s in _steps(new)] == expected
    assert_contiguous_order(new.get_block("blk"))


@pytest.mark.parametrize("src", [-1, 3, 42])
def test_reorder_out_of_range_source_is_noop(state, src):
    assert reducer.reorder_steps(state, "blk", src, 0) is state


def test_reorder_to_same_position_is_noop(state):
    assert reducer.reorder_steps(state, "blk", 1, 1) is state


def test_order_stays_contiguous_across_random_edits(state):
    rng = random.Random(7)
    for _ in range(200):
        steps = _steps(state)
        op = rng.choice(["add", "delete", "reorder", "duplicate"])
        if op == "add":
            after = rng.choice([None] + [s.id for s in steps])
            state = reducer.add_step(state, "blk", after)
        elif op == "delete" and steps:
            state = reducer.delete_step(state, "blk", rng.choice(steps).id)
        elif op == "duplicate" and steps:
            state = reducer.duplicate_step(state, "blk", rng.choice(steps).id)
        else:
            n = max(len(steps), 1)
            state = reducer.reorder_steps(state, "blk", rng.randrange(-1, n + 1), rng.randrange(-2, n + 2))
        assert_contiguous_order(state.get_block("blk"))

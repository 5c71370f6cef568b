import pytest

from site_builder.core.services.undo_service import DEFAULT_MAX_HISTORY, UndoService
from site_builder.core.tree import instantiate


@pytest.fixture
def service():
    return UndoService()


def test_default_capacity_is_twenty(service):
    assert service.max_history == DEFAULT_MAX_HISTORY == 20


def test_undo_on_empty_history_is_noop(service):
    assert service.can_undo() is False
    assert service.undo() is False
    assert service.current == []


def test_commit_then_undo_restores_exact_forest(service, forest):
    service.reset(forest)
    changed = forest[1:] + [instantiate("button")]
    service.commit(changed)
    assert service.current == changed
    assert service.undo() is True
    assert service.current == forest
    assert service.undo() is False


def test_no_redo_after_undo(service, forest):
    service.commit(forest)
    service.undo()
    assert service.depth() == 0
    assert service.current == []


def test_history_never_aliases_live_nodes(service, forest):
    service.reset(forest)
    service.commit([])
    service.undo()
    restored = service.current
    assert restored == forest
    assert all(a is not b for a, b in zip(restored, forest))
    # mutating a live node in place does not reach history
    service.commit(restored)
    restored[0].props["text"] = "corrupted"
    service.undo()
    assert service.current[0].props["text"] == "Your headline"


def test_history_is_bounded(service):
    states = [[instantiate("spacer", {"height": n})] for n in range(26)]
    service.reset(states[0])
    for state in states[1:]:
        service.commit(state)  # 25 commits
    assert service.depth() == 20
    undone = 0
    while service.undo():
        undone += 1
    assert undone == 20
    # oldest reachable state is the one committed 20 steps back
    assert service.current == states[5]
    assert service.current != states[4]


def test_capacity_is_coerced_to_at_least_one():
    svc = UndoService(max_history=0)
    svc.commit([])
    svc.commit([])
    assert svc.depth() == 1


def test_current_returns_copy(service, forest):
    service.reset(forest)
    service.current.clear()
    assert len(service.current) == 3


def test_clear_keeps_live_forest(service, forest):
    service.commit(forest)
    service.clear()
    assert service.can_undo() is False
    assert service.current == forest

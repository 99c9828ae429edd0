"""测试配置和共享 Fixtures。"""

import pytest

from santa.models import Exclusion, ForcedAssignment, Participant


# ============================================================================
# Roster Fixtures
# ============================================================================

def make_roster(*names: str) -> list[Participant]:
    """按名字创建参与者，id 使用小写名字。"""
    return [Participant(id=name.lower(), name=name) for name in names]


@pytest.fixture
def roster():
    """返回 make_roster，用于测试内自定义名单。"""
    return make_roster


@pytest.fixture
def abc() -> list[Participant]:
    """三人名单 A, B, C。"""
    return make_roster("A", "B", "C")


@pytest.fixture
def abcd() -> list[Participant]:
    """四人名单 A, B, C, D。"""
    return make_roster("A", "B", "C", "D")


@pytest.fixture
def office_party() -> list[Participant]:
    """较大的名单（包含一个空白占位行）。"""
    roster = make_roster(
        "Alice", "Bob", "Carol", "Dave", "Erin", "Frank", "Grace", "Heidi", "Ivan", "Judy",
    )
    roster.append(Participant(id="blank", name="   "))
    return roster


# ============================================================================
# Assertion Helpers
# ============================================================================

@pytest.fixture
def assert_valid_draw():
    """返回校验完整分配结果的函数。

    校验:
    - 每个有名字的参与者恰好送出一次、收到一次
    - 没有人抽到自己
    - 排除规则双向生效
    - 指定配对全部出现
    """

    def _check(result, participants, exclusions=(), forced=()):
        assert result.success, result.message
        named = {p.id for p in participants if p.name.strip()}
        givers = [m.giver.id for m in result.matches]
        receivers = [m.receiver.id for m in result.matches]

        assert sorted(givers) == sorted(named)
        assert sorted(receivers) == sorted(named)
        assert all(m.giver.id != m.receiver.id for m in result.matches)

        pairs = set(result.as_id_pairs())
        for ex in exclusions:
            assert (ex.p1, ex.p2) not in pairs
            assert (ex.p2, ex.p1) not in pairs
        for fa in forced:
            assert (fa.giver_id, fa.receiver_id) in pairs

    return _check


@pytest.fixture
def sample_rules():
    """常见规则组合：一对情侣互斥 + 一个指定配对。"""
    exclusions = [Exclusion(p1="alice", p2="bob")]
    forced = [ForcedAssignment(giver_id="carol", receiver_id="dave")]
    return exclusions, forced

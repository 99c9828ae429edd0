"""数据模型单元测试。"""

from santa.models import (
    Exclusion,
    FailureReason,
    ForcedAssignment,
    Match,
    MatchResult,
    Participant,
)


class TestParticipant:
    """测试 Participant 数据类。"""

    def test_default_values(self):
        """测试默认值。"""
        p = Participant(id="1", name="Alice")

        assert p.notes == ""
        assert p.budget == ""

    def test_is_named(self):
        """测试空白名字视为占位行。"""
        assert Participant(id="1", name="Alice").is_named
        assert not Participant(id="2", name="   ").is_named
        assert not Participant(id="3", name="").is_named

    def test_from_dict_with_missing_fields(self):
        """测试 from_dict 处理缺失和 null 字段。"""
        p = Participant.from_dict({"id": 7, "name": None})

        assert p.id == "7"
        assert p.name == ""
        assert p.notes == ""

    def test_from_dict_coerces_to_text(self):
        """测试非字符串字段被转换为文本。"""
        p = Participant.from_dict({"id": "1", "name": 5, "budget": 25})

        assert p.name == "5"
        assert p.budget == "25"
        assert p.is_named

    def test_to_dict(self):
        """测试 to_dict 保留附加信息。"""
        p = Participant(id="1", name="Alice", notes="likes tea", budget="$25")

        assert p.to_dict() == {"id": "1", "name": "Alice", "notes": "likes tea", "budget": "$25"}


class TestRules:
    """测试 Exclusion 和 ForcedAssignment。"""

    def test_exclusion_is_unordered(self):
        """测试排除规则与顺序无关。"""
        assert Exclusion(p1="a", p2="b").key == Exclusion(p1="b", p2="a").key
        assert Exclusion(p1="a", p2="b").involves("b", "a")
        assert not Exclusion(p1="a", p2="b").involves("a", "c")

    def test_forced_assignment_wire_keys(self):
        """测试指定配对使用 camelCase 字段。"""
        fa = ForcedAssignment.from_dict({"giverId": "a", "receiverId": "b"})

        assert fa == ForcedAssignment(giver_id="a", receiver_id="b")
        assert fa.to_dict() == {"giverId": "a", "receiverId": "b"}

    def test_forced_assignment_snake_case(self):
        """测试 from_dict 也接受 snake_case 字段。"""
        fa = ForcedAssignment.from_dict({"giver_id": "a", "receiver_id": "b"})

        assert fa.giver_id == "a"
        assert fa.receiver_id == "b"


class TestMatchResult:
    """测试 MatchResult。"""

    def test_success_to_dict(self):
        """测试成功结果的序列化。"""
        a = Participant(id="a", name="A")
        b = Participant(id="b", name="B")
        result = MatchResult(matches=[Match(a, b), Match(b, a)], attempts=2)

        data = result.to_dict()

        assert data["success"] is True
        assert data["attempts"] == 2
        assert data["matches"][0]["giver"]["name"] == "A"
        assert data["matches"][0]["receiver"]["name"] == "B"
        assert result.as_id_pairs() == [("a", "b"), ("b", "a")]

    def test_failure_to_dict(self):
        """测试失败结果包含原因和提示信息。"""
        result = MatchResult.failed(FailureReason.INFEASIBLE, attempts=100)

        data = result.to_dict()

        assert data["success"] is False
        assert data["reason"] == "infeasible"
        assert "matches" not in data
        assert data["error"] == result.message

    def test_match_round_trip(self):
        """测试 Match 的 from_dict。"""
        data = {"giver": {"id": "a", "name": "A"}, "receiver": {"id": "b", "name": "B"}}

        match = Match.from_dict(data)

        assert match.giver.id == "a"
        assert match.receiver.name == "B"

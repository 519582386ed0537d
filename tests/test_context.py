"""コンテキスト解決のユニットテスト"""

from datetime import datetime, timezone

from k1s0_toggle import Context, resolve_context_value


def test_well_known_fields() -> None:
    """既知フィールドは属性から解決する。"""
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    context = Context(
        user_id="u1",
        session_id="s1",
        remote_address="10.0.0.1",
        environment="prod",
        app_name="shop",
        current_time=now,
    )
    assert resolve_context_value(context, "userId") == "u1"
    assert resolve_context_value(context, "sessionId") == "s1"
    assert resolve_context_value(context, "remoteAddress") == "10.0.0.1"
    assert resolve_context_value(context, "environment") == "prod"
    assert resolve_context_value(context, "appName") == "shop"
    assert resolve_context_value(context, "currentTime") == now


def test_well_known_field_takes_precedence() -> None:
    """既知フィールドは properties より優先される。"""
    context = Context(user_id="u1", properties={"userId": "other"})
    assert resolve_context_value(context, "userId") == "u1"


def test_falls_back_to_properties() -> None:
    """既知フィールドが未設定なら properties を参照する。"""
    context = Context(properties={"userId": "from-props", "tenant": "t1"})
    assert resolve_context_value(context, "userId") == "from-props"
    assert resolve_context_value(context, "tenant") == "t1"


def test_missing_and_empty_values() -> None:
    """未設定と空文字列は None。"""
    context = Context(environment="", properties={"tenant": ""})
    assert resolve_context_value(context, "environment") is None
    assert resolve_context_value(context, "tenant") is None
    assert resolve_context_value(context, "unknown") is None


def test_properties_not_mutated() -> None:
    """解決処理はコンテキストを変更しない。"""
    properties = {"tenant": "t1"}
    context = Context(properties=properties)
    resolve_context_value(context, "tenant")
    resolve_context_value(context, "userId")
    assert properties == {"tenant": "t1"}

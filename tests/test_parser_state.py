from notemark.classifiers import try_close_fence, try_open_fence
from notemark.models import ParserContext, ParserState


def test_try_open_fence_sets_context_fields():
    ctx = ParserContext()

    opened = try_open_fence(ctx, "   ```python", 4)

    assert opened is True
    assert ctx.state is ParserState.IN_FENCED_CODE
    assert ctx.language == "python"
    assert ctx.fence_line == 4


def test_try_open_fence_ignored_when_already_in_code():
    ctx = ParserContext(state=ParserState.IN_FENCED_CODE, language="go", fence_line=1)

    assert try_open_fence(ctx, "```rust", 5) is False
    assert ctx.language == "go"
    assert ctx.fence_line == 1


def test_try_open_fence_rejects_plain_text():
    ctx = ParserContext()

    assert try_open_fence(ctx, "no fence here") is False
    assert ctx.state is ParserState.NORMAL


def test_try_close_fence_requires_untagged_delimiter():
    ctx = ParserContext(state=ParserState.IN_FENCED_CODE, language="go", fence_line=0)

    assert try_close_fence(ctx, "```go") is False
    assert ctx.state is ParserState.IN_FENCED_CODE

    assert try_close_fence(ctx, "~~~") is True
    assert ctx.state is ParserState.NORMAL
    assert ctx.language is None
    assert ctx.fence_line is None


def test_try_close_fence_ignored_outside_code():
    ctx = ParserContext()

    assert try_close_fence(ctx, "```") is False
    assert ctx.state is ParserState.NORMAL

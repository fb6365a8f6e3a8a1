from scheduling.status_styles import TARGET_TEXT_COLOR, active_columns, column_style, column_styles


def test_active_columns(pipeline):
    assert active_columns(pipeline.get(2)) == ["machining"]
    assert active_columns(pipeline.get(1)) == []
    assert active_columns(None) == []


def test_column_style(pipeline):
    stage = pipeline.get(3)
    assert column_style(stage, "assembly") == {"backgroundColor": "#DC2626", "color": TARGET_TEXT_COLOR}
    assert column_style(stage, "nesting") == {}
    assert column_style(None, "assembly") == {}


def test_column_styles(pipeline):
    assert column_styles(pipeline.get(4)) == {"delivery": {"backgroundColor": "#7C2D12", "color": "#ffffff"}}
    assert column_styles(pipeline.get(5)) == {}

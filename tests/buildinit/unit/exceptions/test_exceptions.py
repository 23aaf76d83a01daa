import mock

from buildinit.clis.utils import pretty_print_exception
from buildinit.exceptions import base, user


def test_buildinit_exception():
    try:
        raise base.BuildInitException("bad")
    except Exception as e:
        assert str(e) == "UnknownBuildInitException: bad"
        assert isinstance(type(e), base._BuildInitCodedExceptionMetaclass)
        assert type(e).error_code == "UnknownBuildInitException"


def test_buildinit_exception_cause():
    try:
        raise base.BuildInitException("bad") from Exception("exception from somewhere else")
    except Exception as e:
        assert str(e) == "UnknownBuildInitException: bad (caused by: exception from somewhere else)"


def test_user_error_codes():
    assert user.BuildInitValueException.error_code == "USER:ValueError"
    assert user.UnresolvedBuilderImagesError.error_code == "USER:UnresolvedBuilderImages"

    e = user.BuildInitValueException("x", "not good")
    assert str(e) == "USER:ValueError: Value error!  Received: x. not good"
    assert isinstance(e, ValueError)


def test_reference_parse_error_message():
    e = user.ReferenceParseError("App", "repository name must be lowercase")
    assert str(e) == "repository name must be lowercase"
    assert type(e).error_code == "USER:ReferenceParseError"


@mock.patch("buildinit.clis.utils.Panel")
@mock.patch("buildinit.clis.utils.Console")
def test_panels_are_titled_with_error_code(mock_console, mock_panel):
    pretty_print_exception(user.UnresolvedBuilderImagesError(["web"], ["Docker (a/Dockerfile)"]))
    assert mock_panel.call_args.kwargs["title"] == "USER:UnresolvedBuilderImages"
    assert "  - web" in mock_panel.call_args.args[0]

    pretty_print_exception(user.BuildInitValueException("x", "not good"))
    assert mock_panel.call_args.kwargs["title"] == "USER:ValueError"
    assert mock_console.return_value.print.call_count == 2

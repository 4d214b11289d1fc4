import subprocess
import pytest
from notebook_cli.errors import ExternalProgramError
from notebook_cli.models import SearchOutcome
from notebook_cli.programs import run_interactive, run_search, search_command


def test_run_interactive(run):
    run.side_effect = lambda args, **kwargs: subprocess.CompletedProcess(args, 3)
    assert run_interactive('vim', '/notes/a b.txt') == 3
    run.assert_called_once_with(['vim', '/notes/a b.txt'])


def test_run_interactive_program_with_arguments(run):
    run_interactive('code --wait', '/notes/a.txt')
    run_interactive("'/Applications/My Editor' -w", '/notes/a.txt')
    assert [c.args[0] for c in run.call_args_list] == [
        ['code', '--wait', '/notes/a.txt'],
        ['/Applications/My Editor', '-w', '/notes/a.txt'],
    ]


def test_run_interactive_never_uses_shell(run):
    path = '/notes/$(rm -rf ~)"; echo hi.txt'
    run_interactive('less', path)
    args, kwargs = run.call_args
    assert args == (['less', path],)
    assert not kwargs.get('shell')


@pytest.mark.parametrize('program', ['', '   '])
def test_run_interactive_blank_program(run, program):
    with pytest.raises(ExternalProgramError, match='No program configured'):
        run_interactive(program, '/notes/a.txt')
    run.assert_not_called()


def test_run_interactive_unbalanced_quotes(run):
    with pytest.raises(ExternalProgramError, match='Invalid program command'):
        run_interactive('"vim', '/notes/a.txt')


def test_run_interactive_missing_program(run):
    run.side_effect = FileNotFoundError(2, 'No such file or directory')
    with pytest.raises(ExternalProgramError, match='Could not run nope: No such file or directory') as exc_info:
        run_interactive('nope', '/notes/a.txt')
    assert exc_info.value.program == 'nope'


def test_search_command():
    assert search_command('TODO', '/notes/work', 'linux') == ['grep', '-r', '-i', '--', 'TODO', '/notes/work']
    assert search_command('-v', '/notes', 'darwin') == ['grep', '-r', '-i', '--', '-v', '/notes']


def test_search_command_windows(fs):
    fs.create_file('/notes/work/a.txt')
    assert search_command('to do', '/notes/work', 'win32') == [
        'findstr', '/s', '/i', '/p', '/c:to do', '/notes/work/*']
    assert search_command('to do', '/notes/work/a.txt', 'win32') == [
        'findstr', '/s', '/i', '/p', '/c:to do', '/notes/work/a.txt']


@pytest.mark.parametrize('status,outcome', [
    (0, SearchOutcome.MATCHES),
    (1, SearchOutcome.NO_MATCHES),
    (2, SearchOutcome.FAILED),
])
def test_run_search(run, mocker, status, outcome):
    mocker.patch('sys.platform', 'linux')
    run.side_effect = lambda args, **kwargs: subprocess.CompletedProcess(args, status)
    assert run_search('todo', '/notes') == outcome
    run.assert_called_once_with(['grep', '-r', '-i', '--', 'todo', '/notes'])


def test_run_search_missing_utility(run, mocker):
    mocker.patch('sys.platform', 'linux')
    run.side_effect = FileNotFoundError(2, 'No such file or directory')
    with pytest.raises(ExternalProgramError, match='Could not run grep'):
        run_search('todo', '/notes')

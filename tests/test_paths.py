import pytest
from notebook_cli.errors import PathError
from notebook_cli.paths import NotesRoot


def test_resolve(fs):
    fs.create_dir('/notes')
    root = NotesRoot('/notes')
    assert root.resolve() == '/notes'
    assert root.resolve('') == '/notes'
    assert root.resolve('.') == '/notes'
    assert root.resolve('todo.txt') == '/notes/todo.txt'
    assert root.resolve('work/project/todo.txt') == '/notes/work/project/todo.txt'
    assert root.resolve('work/../todo.txt') == '/notes/todo.txt'
    assert root.resolve('/notes/work') == '/notes/work'


@pytest.mark.parametrize('path', ['..', '../etc/passwd', 'work/../../elsewhere', '/etc/passwd', '/notesfoo/bar'])
def test_resolve_outside_root(fs, path):
    fs.create_dir('/notes')
    with pytest.raises(PathError, match='outside the notes directory') as exc_info:
        NotesRoot('/notes').resolve(path)
    assert exc_info.value.path == path


def test_resolve_symlink_outside_root(fs):
    fs.create_dir('/notes')
    fs.create_dir('/elsewhere')
    fs.create_symlink('/notes/link', '/elsewhere')
    root = NotesRoot('/notes')
    with pytest.raises(PathError):
        root.resolve('link/secret.txt')


def test_root_symlink(fs):
    fs.create_dir('/real/notes')
    fs.create_symlink('/notes', '/real/notes')
    root = NotesRoot('/notes')
    assert root.path == '/real/notes'
    assert root.resolve('a.txt') == '/real/notes/a.txt'


def test_relativize(fs):
    fs.create_dir('/notes')
    root = NotesRoot('/notes')
    assert root.relativize('/notes') == '.'
    assert root.relativize('/notes/work/todo.txt') == 'work/todo.txt'


@pytest.mark.parametrize('path', ['', '.', 'a.txt', 'work/project', 'work/./project/../x.txt', 'name with spaces.txt'])
def test_round_trip(fs, path):
    fs.create_dir('/notes')
    root = NotesRoot('/notes')
    resolved = root.resolve(path)
    assert root.resolve(root.relativize(resolved)) == resolved


def test_locate_keeps_final_symlink(fs):
    fs.create_dir('/notes/real')
    fs.create_symlink('/notes/alias', '/notes/real')
    root = NotesRoot('/notes')
    assert root.locate('alias') == '/notes/alias'
    assert root.locate('alias/') == '/notes/alias'
    assert root.resolve('alias') == '/notes/real'
    assert root.locate('') == '/notes'
    assert root.locate('work/..') == '/notes'


def test_locate_follows_parent_symlinks(fs):
    fs.create_dir('/notes/real')
    fs.create_symlink('/notes/alias', '/notes/real')
    fs.create_dir('/elsewhere')
    fs.create_symlink('/notes/out', '/elsewhere')
    root = NotesRoot('/notes')
    assert root.locate('alias/a.txt') == '/notes/real/a.txt'
    with pytest.raises(PathError):
        root.locate('out/a.txt')


@pytest.mark.parametrize('path', ['..', '../etc/passwd', 'work/../../elsewhere', '/etc/passwd'])
def test_locate_outside_root(fs, path):
    fs.create_dir('/notes')
    with pytest.raises(PathError):
        NotesRoot('/notes').locate(path)

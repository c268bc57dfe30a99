from pathlib import Path

from postmatter.errors import MalformedField, MissingMetadataBlock
from postmatter.loader import FileDocumentLoader, LoadResult, load_directory
from postmatter.protocols import DocumentLoader


def create_content(tmp_path: Path) -> Path:
    content = tmp_path / "content"
    (content / "posts").mkdir(parents=True)
    (content / "_drafts").mkdir()
    (content / ".cache").mkdir()

    (content / "about.md").write_text(
        '---\ntitle: "About"\ndate: 2023-01-01T09:00:00+00:00\n---\nAbout page\n',
        encoding="utf-8",
    )
    (content / "posts" / "2023-02-01-functional.md").write_text(
        '---\ntitle: "Functional patterns"\ndate: 2023-02-01T16:00:00-08:00\ndraft: false\n---\n# Hi\n',
        encoding="utf-8",
    )
    (content / "posts" / "wip.md").write_text(
        '---\ntitle: "Work in progress"\ndate: 2023-03-01T10:00:00+01:00\ndraft: true\n---\n',
        encoding="utf-8",
    )
    (content / "posts" / "broken.md").write_text(
        '---\ntitle: "Broken"\ndate: someday\n---\n', encoding="utf-8"
    )
    (content / "posts" / "plain.md").write_text("# No front matter\n", encoding="utf-8")
    (content / "posts" / "notes.txt").write_text("ignored", encoding="utf-8")
    (content / "_drafts" / "hidden.md").write_text("ignored", encoding="utf-8")
    (content / ".cache" / "cached.md").write_text("ignored", encoding="utf-8")
    return content


def test_iter_files_skips_internal_and_non_markdown(tmp_path):
    content = create_content(tmp_path)
    loader = FileDocumentLoader(content)
    assert isinstance(loader, DocumentLoader)
    names = [p.relative_to(content).as_posix() for p in loader.iter_files()]
    assert names == [
        "about.md",
        "posts/2023-02-01-functional.md",
        "posts/broken.md",
        "posts/plain.md",
        "posts/wip.md",
    ]


def test_load_directory_collects_errors_and_skips_drafts(tmp_path):
    content = create_content(tmp_path)
    result = load_directory(content)
    assert isinstance(result, LoadResult)
    assert not result.ok
    assert sorted(d.title for d in result.documents) == ["About", "Functional patterns"]

    assert len(result.errors) == 2
    by_name = {e.source_path.name: e for e in result.errors}
    assert isinstance(by_name["broken.md"], MalformedField)
    assert by_name["broken.md"].line == 3
    assert isinstance(by_name["plain.md"], MissingMetadataBlock)


def test_load_directory_include_drafts(tmp_path):
    content = create_content(tmp_path)
    result = load_directory(content, include_drafts=True)
    assert [d.title for d in result.documents.drafts()] == ["Work in progress"]
    assert result.documents.latest(1)[0].title == "Work in progress"


def test_load_result_pairs_paths_with_documents(tmp_path):
    content = create_content(tmp_path)
    result = load_directory(content)
    pairs = {path.name: document.title for path, document in result.items()}
    assert pairs == {"about.md": "About", "2023-02-01-functional.md": "Functional patterns"}


def test_load_directory_with_custom_loader(tmp_path):
    path = tmp_path / "single.md"
    path.write_text("---\ntitle: One\ndate: 2023-02-01T16:00:00Z\n---\n", encoding="utf-8")

    class SingleFileLoader:
        def iter_files(self):
            return [path]

    result = load_directory(tmp_path, loader=SingleFileLoader())
    assert result.ok
    assert [d.title for d in result.documents] == ["One"]


def test_load_directory_missing_dir(tmp_path):
    result = load_directory(tmp_path / "nope")
    assert result.ok
    assert len(result.documents) == 0


def test_load_directory_collects_unreadable_files(tmp_path):
    content = tmp_path / "content"
    content.mkdir()
    (content / "good.md").write_text(
        "---\ntitle: Good\ndate: 2023-02-01T16:00:00Z\n---\n", encoding="utf-8"
    )
    (content / "dangling.md").symlink_to(tmp_path / "missing-target.md")

    result = load_directory(content)
    assert [d.title for d in result.documents] == ["Good"]
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.source_path == content / "dangling.md"
    assert "could not read file" in error.message

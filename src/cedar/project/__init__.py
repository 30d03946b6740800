"""Project scaffolding for ``cedar new`` and ``cedar init``."""

from cedar.project.scaffold import init_git, init_project, new_project, project_name_from_dir

__all__ = ["init_git", "init_project", "new_project", "project_name_from_dir"]

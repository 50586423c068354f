"""GraphQL operation text for the Wiki.js 2.x API.

This is the only module that interpolates values into operation text.
Two kinds of slots exist:

- Quoted string slots ("...") receive values escaped by sanitize_string.
- Literal slots receive JSON literals (json.dumps) for free text, tag lists
  and booleans, or validated integers for identifiers.

Callers are expected to pass identifiers through validate_id and paths
through validate_path before calling a builder here.
"""

import json
from typing import List

from ..wikijs_client.validation import sanitize_string

RESPONSE_RESULT = "responseResult { succeeded errorCode message }"

PAGE_LIST_FIELDS = """
          id
          path
          title
          description
          locale
          createdAt
          updatedAt
          tags
          isPublished"""

PAGE_DETAIL_FIELDS = """
            id
            path
            title
            description
            content
            render
            locale
            createdAt
            updatedAt
            authorName
            tags { tag }
            isPublished
            isPrivate"""


def _literal(value) -> str:
    """Render a JSON literal (string, list or boolean) for a literal slot."""
    return json.dumps(value)


def list_pages_query(fields: str = PAGE_LIST_FIELDS) -> str:
    # pages.list takes no filter arguments in Wiki.js 2.x
    return f"""
    query {{
      pages {{
        list {{{fields}
        }}
      }}
    }}
    """


def search_pages_query(search: str) -> str:
    return f"""
    query {{
      pages {{
        search(query: "{sanitize_string(search)}") {{
          results {{
            id
            path
            title
            description
            locale
          }}
          suggestions
          totalHits
        }}
      }}
    }}
    """


def single_page_query(page_id: int) -> str:
    return f"""
    query {{
      pages {{
        single(id: {page_id}) {{{PAGE_DETAIL_FIELDS}
        }}
      }}
    }}
    """


def page_by_path_query(path: str, locale: str) -> str:
    return f"""
    query {{
      pages {{
        singleByPath(path: "{sanitize_string(path)}", locale: "{sanitize_string(locale)}") {{{PAGE_DETAIL_FIELDS}
        }}
      }}
    }}
    """


def create_page_mutation(
    path: str,
    title: str,
    content: str,
    description: str,
    tags: List[str],
    locale: str,
    editor: str,
    is_published: bool,
    is_private: bool,
) -> str:
    return f"""
    mutation {{
      pages {{
        create(
          content: {_literal(content)}
          description: {_literal(description)}
          editor: "{sanitize_string(editor)}"
          isPrivate: {_literal(is_private)}
          isPublished: {_literal(is_published)}
          locale: "{sanitize_string(locale)}"
          path: "{sanitize_string(path)}"
          tags: {_literal(tags)}
          title: {_literal(title)}
        ) {{
          {RESPONSE_RESULT}
          page {{
            id
            path
            title
          }}
        }}
      }}
    }}
    """


def update_page_mutation(
    page_id: int,
    content: str,
    description: str,
    is_published: bool,
    tags: List[str],
    title: str,
) -> str:
    # The update mutation replaces every field, so all of them are sent
    return f"""
    mutation {{
      pages {{
        update(
          id: {page_id}
          content: {_literal(content)}
          description: {_literal(description)}
          isPublished: {_literal(is_published)}
          tags: {_literal(tags)}
          title: {_literal(title)}
        ) {{
          {RESPONSE_RESULT}
          page {{
            id
            path
            title
            updatedAt
          }}
        }}
      }}
    }}
    """


def move_page_mutation(page_id: int, destination_path: str, destination_locale: str) -> str:
    return f"""
    mutation {{
      pages {{
        move(
          id: {page_id}
          destinationPath: "{sanitize_string(destination_path)}"
          destinationLocale: "{sanitize_string(destination_locale)}"
        ) {{
          {RESPONSE_RESULT}
        }}
      }}
    }}
    """


def delete_page_mutation(page_id: int) -> str:
    return f"""
    mutation {{
      pages {{
        delete(id: {page_id}) {{
          {RESPONSE_RESULT}
        }}
      }}
    }}
    """


def list_tags_query() -> str:
    return """
    query {
      pages {
        tags {
          id
          tag
          title
          createdAt
          updatedAt
        }
      }
    }
    """


def page_history_query(page_id: int) -> str:
    return f"""
    query {{
      pages {{
        history(id: {page_id}) {{
          trail {{
            versionId
            versionDate
            authorName
            actionType
          }}
          total
        }}
      }}
    }}
    """


def restore_page_mutation(page_id: int, version_id: int) -> str:
    return f"""
    mutation {{
      pages {{
        restore(pageId: {page_id}, versionId: {version_id}) {{
          {RESPONSE_RESULT}
        }}
      }}
    }}
    """


def list_assets_query() -> str:
    return """
    query {
      assets {
        list(folderId: 0, kind: ALL) {
          id
          filename
          ext
          kind
          mime
          fileSize
          createdAt
          updatedAt
        }
      }
    }
    """


def delete_asset_mutation(asset_id: int) -> str:
    return f"""
    mutation {{
      assets {{
        deleteAsset(id: {asset_id}) {{
          {RESPONSE_RESULT}
        }}
      }}
    }}
    """


def system_info_query() -> str:
    return """
    query {
      system {
        info {
          configFile
          currentVersion
          latestVersion
          operatingSystem
          hostname
          platform
        }
      }
    }
    """

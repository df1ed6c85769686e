"""
Catálogo de operaciones de la Graph API.

Cada entrada es un Endpoint: agregar una operación nueva es solo agregar una
línea aquí. El catálogo es de solo lectura y se arma una vez al importar.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from graph_errors import UnknownOperationError
from graph_request import IMAGE, NONE, Endpoint, Param, Shape, Source, many, single
from graph_types import EntityKind as K


# Parámetros comunes
def _path(name: str) -> Param:
    return Param(name, Source.PATH)


def _opt(name: str, default: Optional[str] = None) -> Param:
    return Param(name, Source.QUERY, required=False, default=default)


def _form(name: str, wire: Optional[str] = None, required: bool = True) -> Param:
    return Param(name, Source.FORM, required=required, wire=wire)


# since/until aceptan un timestamp unix o cualquier fecha que entienda strtotime
PAGING = (
    _opt("since", "last week"),
    _opt("until", "yesterday"),
    _opt("limit", "3"),
    _opt("offset", "2"),
)
METADATA = _opt("metadata", "0")
PICTURE_TYPE = _opt("type", "small")
QUERY = Param("q", Source.QUERY)


# Familias de endpoints
def _search(name: str, kind: K, type_: Optional[str] = None, auth: bool = False,
            with_q: bool = True) -> Endpoint:
    params = ((QUERY,) if with_q else ()) + PAGING
    fixed = (("type", type_),) if type_ else ()
    return Endpoint(name, "search", params=params, shape=many(kind), auth=auth, fixed=fixed)


def _object(name: str, arg: str, kind: K, auth: bool = False, metadata: bool = True) -> Endpoint:
    params = (_path(arg), METADATA) if metadata else (_path(arg),)
    return Endpoint(name, f"{{{arg}}}", params=params, shape=single(kind), auth=auth)


def _edge(name: str, arg: str, edge: str, kind: K, auth: bool = False,
          shape: Optional[Shape] = None) -> Endpoint:
    return Endpoint(name, f"{{{arg}}}/{edge}", params=(_path(arg),) + PAGING,
                    shape=shape or many(kind), auth=auth)


def _picture(name: str, arg: str, auth: bool = False) -> Endpoint:
    return Endpoint(name, f"{{{arg}}}/picture", params=(_path(arg), PICTURE_TYPE),
                    shape=IMAGE, auth=auth)


def _publish(name: str, arg: str, edge: str, *fields: Param, token_in: Source = Source.QUERY) -> Endpoint:
    return Endpoint(name, f"{{{arg}}}/{edge}", method="POST", params=(_path(arg),) + fields,
                    shape=single(K.FACEBOOK_TYPE), auth=True, token_in=token_in)


def _action(name: str, arg: str, path: str, method: str = "POST") -> Endpoint:
    return Endpoint(name, path, method=method, params=(_path(arg),), shape=NONE, auth=True)


ENDPOINTS = (
    # Sesión
    Endpoint("logged_user_details", "me", shape=single(K.USER), auth=True),

    # Búsqueda
    _search("search_posts", K.POST),
    _search("search_users", K.USER, "user", auth=True),
    _search("search_pages", K.PAGE, "page"),
    _search("search_events", K.EVENT, "event", auth=True),
    _search("search_groups", K.GROUP, "group", auth=True),
    _search("search_checkins", K.CHECKIN, "checkin", auth=True, with_q=False),

    # Álbumes
    _object("get_album", "album", K.ALBUM),
    _edge("get_album_photos", "album", "photos", K.PHOTO),
    _edge("get_album_comments", "album", "comments", K.COMMENT),

    # Eventos
    _object("get_event", "event_id", K.EVENT),
    _edge("get_event_wall", "event_id", "feed", K.POST, auth=True),
    _edge("get_event_no_reply", "event_id", "noreply", K.USER, auth=True),
    _edge("get_event_maybe", "event_id", "maybe", K.USER, auth=True),
    _edge("get_event_invited", "event_id", "invited", K.USER, auth=True),
    _edge("get_event_attending", "event_id", "attending", K.USER, auth=True),
    _edge("get_event_declined", "event_id", "declined", K.USER, auth=True),
    _picture("get_event_picture", "event_id"),

    # Grupos
    _object("get_group", "group", K.GROUP),
    _edge("get_group_wall", "group", "feed", K.POST, auth=True),
    _edge("get_group_members", "group", "members", K.MEMBER, auth=True),
    _picture("get_group_picture", "group"),

    # Links
    _object("get_link", "link", K.LINK, auth=True),
    _edge("get_link_comments", "link", "comments", K.COMMENT, auth=True),

    # Notas
    _object("get_note", "note", K.NOTE, auth=True),
    _edge("get_note_comments", "note", "comments", K.COMMENT),
    _edge("get_note_likes", "note", "likes", K.LIKES, shape=single(K.LIKES)),

    # Páginas
    _object("get_page", "page", K.PAGE),
    _edge("get_page_wall", "page", "feed", K.POST, auth=True),
    _picture("get_page_picture", "page"),
    _edge("get_page_tagged", "page", "tagged", K.POST, auth=True),
    _edge("get_page_links", "page", "links", K.LINK),
    _edge("get_page_photos", "page", "photos", K.PHOTO),
    _edge("get_page_groups", "page", "groups", K.GROUP, auth=True),
    _edge("get_page_albums", "page", "albums", K.ALBUM),
    _edge("get_page_statuses", "page", "statuses", K.STATUS_MESSAGE, auth=True),
    _edge("get_page_videos", "page", "videos", K.VIDEO, auth=True),
    _edge("get_page_notes", "page", "notes", K.NOTE, auth=True),
    _edge("get_page_posts", "page", "posts", K.POST, auth=True),
    _edge("get_page_events", "page", "events", K.EVENT, auth=True),
    _edge("get_page_checkins", "page", "checkins", K.CHECKIN, auth=True),

    # Fotos
    _object("get_photo", "photo", K.PHOTO),
    _edge("get_photo_comments", "photo", "comments", K.COMMENT),
    _edge("get_photo_likes", "photo", "likes", K.LIKES, shape=single(K.LIKES)),

    # Posts y estados
    _object("get_post", "post", K.POST),
    _edge("get_post_comments", "post", "comments", K.COMMENT),
    _object("get_status", "status", K.STATUS_MESSAGE, auth=True),
    _edge("get_status_comments", "status", "comments", K.COMMENT, auth=True),

    # Usuarios
    _object("get_user", "user", K.USER),
    Endpoint("get_user_search", "{user}/home",
             params=(_path("user"), _opt("q", "facebook"), METADATA) + PAGING,
             shape=many(K.POST), auth=True),
    _edge("get_user_home", "user", "home", K.POST, auth=True),
    _edge("get_user_wall", "user", "feed", K.POST, auth=True),
    _edge("get_user_tagged", "user", "tagged", K.POST, auth=True),
    _edge("get_user_posts", "user", "posts", K.POST, auth=True),
    _picture("get_user_picture", "user"),
    _edge("get_user_friends", "user", "friends", K.NAMED, auth=True),
    _edge("get_user_activities", "user", "activities", K.PAGE_CONNECTION, auth=True),
    _edge("get_user_checkins", "user", "checkins", K.CHECKIN, auth=True),
    _edge("get_user_interests", "user", "interests", K.PAGE_CONNECTION, auth=True),
    _edge("get_user_music", "user", "music", K.PAGE_CONNECTION, auth=True),
    _edge("get_user_books", "user", "books", K.PAGE_CONNECTION, auth=True),
    _edge("get_user_movies", "user", "movies", K.PAGE_CONNECTION, auth=True),
    _edge("get_user_television", "user", "television", K.PAGE_CONNECTION, auth=True),
    _edge("get_user_likes", "user", "likes", K.PAGE_CONNECTION, auth=True),
    _edge("get_user_photos", "user", "photos", K.PHOTO),
    _edge("get_user_albums", "user", "albums", K.ALBUM),
    _edge("get_user_videos", "user", "videos", K.VIDEO, auth=True),
    _edge("get_user_groups", "user", "groups", K.GROUP, auth=True),
    _edge("get_user_statuses", "user", "statuses", K.STATUS_MESSAGE, auth=True),
    _edge("get_user_links", "user", "links", K.LINK, auth=True),
    _edge("get_user_notes", "user", "notes", K.NOTE, auth=True),
    _edge("get_user_events", "user", "events", K.EVENT, auth=True),
    _edge("get_user_inbox", "user", "inbox", K.THREAD, auth=True),
    _edge("get_user_outbox", "user", "outbox", K.OUTBOX_THREAD, auth=True),
    _edge("get_user_updates", "user", "updates", K.OUTBOX_THREAD, auth=True),
    _edge("get_user_accounts", "user", "accounts", K.ACCOUNT, auth=True),

    # Videos y checkins
    _object("get_video", "video", K.VIDEO, auth=True),
    _edge("get_video_comments", "video", "comments", K.COMMENT),
    _object("get_checkin", "checkin", K.CHECKIN, auth=True),

    # Aplicaciones
    _object("get_application", "application", K.APPLICATION, auth=True, metadata=False),
    _edge("get_application_wall", "application", "feed", K.POST, auth=True),
    _picture("get_application_picture", "application", auth=True),
    _edge("get_application_tagged", "application", "tagged", K.APPLICATION_TAGGED, auth=True),
    _edge("get_application_links", "application", "links", K.POST, auth=True),
    _edge("get_application_photos", "application", "photos", K.PHOTO, auth=True),
    _edge("get_application_albums", "application", "albums", K.ALBUM, auth=True),
    _edge("get_application_statuses", "application", "statuses", K.STATUS_MESSAGE, auth=True),
    _edge("get_application_videos", "application", "videos", K.VIDEO, auth=True),
    _edge("get_application_notes", "application", "notes", K.NOTE, auth=True),
    _edge("get_application_events", "application", "events", K.EVENT, auth=True),
    _edge("get_application_insights", "application", "insights", K.INSIGHT, auth=True),

    # Publicación (requieren publish_stream)
    _publish("publish_message", "profile_id", "feed",
             _form("msg", "message"),
             _form("picture", required=False),
             _form("link", required=False),
             _form("caption", required=False),
             _form("name", required=False),
             _form("description", required=False),
             token_in=Source.FORM),
    _publish("publish_comment", "post_id", "comments", _form("msg", "message"), token_in=Source.FORM),
    _publish("publish_note", "profile_id", "notes", _form("msg", "message"), _form("subject")),
    _publish("publish_link", "profile_id", "links", _form("msg", "message"), _form("link")),
    _publish("publish_event", "profile_id", "events",
             _form("name", required=False),
             _form("start_time", required=False),
             _form("end_time", required=False),
             _form("description", required=False),
             _form("location", required=False)),
    _publish("publish_album", "profile_id", "albums", _form("msg", "message"), _form("name")),
    _publish("publish_photo", "album_id", "photos",
             Param("caption", Source.MULTIPART, wire="message"),
             Param("photo", Source.MULTIPART, wire="source", binary=True)),

    # Acciones sin cuerpo
    _action("like", "post_id", "{post_id}/likes"),
    _action("dislike", "post_id", "{post_id}/likes", method="DELETE"),
    _action("attend_event", "event_id", "{event_id}/attending"),
    _action("tentative_event", "event_id", "{event_id}/maybe"),
    _action("decline_event", "event_id", "{event_id}/declined"),
    _action("delete_object", "object_id", "{object_id}", method="DELETE"),
)


def _index(endpoints) -> Mapping[str, Endpoint]:
    out = {}
    for ep in endpoints:
        if ep.name in out:
            raise ValueError(f"Operación duplicada en el catálogo: {ep.name}")
        out[ep.name] = ep
    return MappingProxyType(out)


CATALOG: Mapping[str, Endpoint] = _index(ENDPOINTS)


def get_endpoint(name: str) -> Endpoint:
    try:
        return CATALOG[name]
    except KeyError:
        raise UnknownOperationError(name) from None

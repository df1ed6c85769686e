"""
Tipos de objeto de la Graph API (Entity Kinds).

Cada tipo es un dataclass y su tabla de mapeo JSON -> atributo se arma una
sola vez al importar el módulo (FIELD_MAPS). Los campos anidados referencian
otro EntityKind y el mapper los resuelve recursivamente.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple


class EntityKind(str, Enum):
    FACEBOOK_TYPE = "FacebookType"
    NAMED = "NamedFacebookType"
    CATEGORIZED = "CategorizedFacebookType"
    USER = "User"
    POST = "Post"
    LIKES = "Likes"
    COMMENT = "Comment"
    COMMENT_LIST = "CommentList"
    PAGE = "Page"
    EVENT = "Event"
    ALBUM = "Album"
    PHOTO = "Photo"
    CHECKIN = "Checkin"
    PLACE = "Place"
    LOCATION = "Location"
    GROUP = "Group"
    MEMBER = "Member"
    LINK = "Link"
    NOTE = "Note"
    STATUS_MESSAGE = "StatusMessage"
    VIDEO = "Video"
    APPLICATION = "Application"
    APPLICATION_TAGGED = "ApplicationTagged"
    ACCOUNT = "Account"
    INSIGHT = "Insight"
    PAGE_CONNECTION = "PageConnection"
    THREAD = "Thread"
    OUTBOX_THREAD = "OutboxThread"


# Conversores de campo
RAW = "raw"
INT = "int"
FLOAT = "float"
BOOL = "bool"
DATE = "date"
ONE = "one"
MANY = "many"


class FieldSpec(NamedTuple):
    key: str
    attr: str
    conv: str
    kind: Optional[EntityKind] = None
    required: bool = False


#  Helpers de declaración
def _conv(conv: str, key: str | None = None):
    return field(default=None, metadata={"conv": conv, "key": key})


def _date(key: str | None = None):
    return _conv(DATE, key)


def _one(kind: EntityKind, key: str | None = None):
    return field(default=None, metadata={"conv": ONE, "kind": kind, "key": key})


def _many(kind: EntityKind, key: str | None = None):
    return field(default_factory=list, metadata={"conv": MANY, "kind": kind, "key": key})


# Base
@dataclass
class FacebookType:
    id: Optional[str] = field(default=None, metadata={"required": True})
    type: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None  # solo con metadata=1


@dataclass
class NamedFacebookType(FacebookType):
    name: Optional[str] = None


@dataclass
class CategorizedFacebookType(NamedFacebookType):
    category: Optional[str] = None


@dataclass
class Location:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    latitude: Optional[float] = _conv(FLOAT)
    longitude: Optional[float] = _conv(FLOAT)


@dataclass
class Place(NamedFacebookType):
    location: Optional[Location] = _one(EntityKind.LOCATION)


# Likes / comentarios
@dataclass
class Likes:
    count: Optional[int] = _conv(INT)
    data: List[NamedFacebookType] = _many(EntityKind.NAMED)


@dataclass
class Comment(FacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    message: Optional[str] = None
    created_time: Optional[datetime] = _date()
    likes: Optional[int] = _conv(INT)


@dataclass
class CommentList:
    count: Optional[int] = _conv(INT)
    data: List[Comment] = _many(EntityKind.COMMENT)


# Usuarios
@dataclass
class User(NamedFacebookType):
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    link: Optional[str] = None
    gender: Optional[str] = None
    locale: Optional[str] = None
    timezone: Optional[float] = _conv(FLOAT)
    verified: Optional[bool] = _conv(BOOL)
    about: Optional[str] = None
    bio: Optional[str] = None
    birthday: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    political: Optional[str] = None
    quotes: Optional[str] = None
    religion: Optional[str] = None
    relationship_status: Optional[str] = None
    third_party_id: Optional[str] = None
    hometown: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    location: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    significant_other: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    updated_time: Optional[datetime] = _date()


@dataclass
class Member(NamedFacebookType):
    administrator: Optional[bool] = _conv(BOOL)


@dataclass
class Account(CategorizedFacebookType):
    access_token: Optional[str] = None


# Publicaciones
@dataclass
class Post(FacebookType):
    from_: Optional[CategorizedFacebookType] = _one(EntityKind.CATEGORIZED)
    to: List[NamedFacebookType] = _many(EntityKind.NAMED)
    message: Optional[str] = None
    picture: Optional[str] = None
    link: Optional[str] = None
    name: Optional[str] = None
    caption: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None
    icon: Optional[str] = None
    attribution: Optional[str] = None
    object_id: Optional[str] = None
    status_type: Optional[str] = None
    privacy: Optional[Dict[str, Any]] = None
    actions: Optional[List[Dict[str, Any]]] = None
    application: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    likes: Optional[Likes] = _one(EntityKind.LIKES)
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)
    created_time: Optional[datetime] = _date()
    updated_time: Optional[datetime] = _date()


@dataclass
class StatusMessage(FacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    message: Optional[str] = None
    updated_time: Optional[datetime] = _date()
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)


@dataclass
class Link(FacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    link: Optional[str] = None
    name: Optional[str] = None
    caption: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    picture: Optional[str] = None
    message: Optional[str] = None
    created_time: Optional[datetime] = _date()
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)


@dataclass
class Note(FacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    subject: Optional[str] = None
    message: Optional[str] = None
    icon: Optional[str] = None
    created_time: Optional[datetime] = _date()
    updated_time: Optional[datetime] = _date()
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)


# Páginas, grupos, eventos
@dataclass
class Page(CategorizedFacebookType):
    link: Optional[str] = None
    picture: Optional[str] = None
    username: Optional[str] = None
    website: Optional[str] = None
    about: Optional[str] = None
    description: Optional[str] = None
    likes: Optional[int] = _conv(INT)
    checkins: Optional[int] = _conv(INT)
    location: Optional[Location] = _one(EntityKind.LOCATION)


@dataclass
class PageConnection(CategorizedFacebookType):
    created_time: Optional[datetime] = _date()


@dataclass
class Group(NamedFacebookType):
    owner: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    description: Optional[str] = None
    link: Optional[str] = None
    icon: Optional[str] = None
    privacy: Optional[str] = None
    venue: Optional[Location] = _one(EntityKind.LOCATION)
    updated_time: Optional[datetime] = _date()


@dataclass
class Event(NamedFacebookType):
    owner: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    description: Optional[str] = None
    location: Optional[str] = None
    privacy: Optional[str] = None
    rsvp_status: Optional[str] = None
    venue: Optional[Location] = _one(EntityKind.LOCATION)
    start_time: Optional[datetime] = _date()
    end_time: Optional[datetime] = _date()
    updated_time: Optional[datetime] = _date()


# Multimedia
@dataclass
class Album(NamedFacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    description: Optional[str] = None
    location: Optional[str] = None
    link: Optional[str] = None
    privacy: Optional[str] = None
    cover_photo: Optional[str] = None
    count: Optional[int] = _conv(INT)
    created_time: Optional[datetime] = _date()
    updated_time: Optional[datetime] = _date()
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)


@dataclass
class Photo(NamedFacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    tags: List[NamedFacebookType] = _many(EntityKind.NAMED)
    picture: Optional[str] = None
    source: Optional[str] = None
    link: Optional[str] = None
    icon: Optional[str] = None
    height: Optional[int] = _conv(INT)
    width: Optional[int] = _conv(INT)
    position: Optional[int] = _conv(INT)
    images: Optional[List[Dict[str, Any]]] = None
    created_time: Optional[datetime] = _date()
    updated_time: Optional[datetime] = _date()
    likes: Optional[Likes] = _one(EntityKind.LIKES)
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)


@dataclass
class Video(NamedFacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    tags: List[NamedFacebookType] = _many(EntityKind.NAMED)
    description: Optional[str] = None
    picture: Optional[str] = None
    embed_html: Optional[str] = None
    icon: Optional[str] = None
    source: Optional[str] = None
    created_time: Optional[datetime] = _date()
    updated_time: Optional[datetime] = _date()
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)


@dataclass
class Checkin(FacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    tags: List[NamedFacebookType] = _many(EntityKind.NAMED)
    place: Optional[Place] = _one(EntityKind.PLACE)
    application: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    message: Optional[str] = None
    created_time: Optional[datetime] = _date()
    likes: Optional[Likes] = _one(EntityKind.LIKES)
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)


# Aplicaciones
@dataclass
class Application(CategorizedFacebookType):
    description: Optional[str] = None
    subcategory: Optional[str] = None
    link: Optional[str] = None


@dataclass
class ApplicationTagged(FacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    to: List[NamedFacebookType] = _many(EntityKind.NAMED)
    message: Optional[str] = None
    link: Optional[str] = None
    created_time: Optional[datetime] = _date()
    updated_time: Optional[datetime] = _date()


@dataclass
class Insight(NamedFacebookType):
    period: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    values: Optional[List[Dict[str, Any]]] = None


# Mensajes
@dataclass
class Thread(FacebookType):
    from_: Optional[NamedFacebookType] = _one(EntityKind.NAMED)
    to: List[NamedFacebookType] = _many(EntityKind.NAMED)
    updated_time: Optional[datetime] = _date()
    unread: Optional[int] = _conv(INT)
    unseen: Optional[int] = _conv(INT)
    comments: Optional[CommentList] = _one(EntityKind.COMMENT_LIST)


@dataclass
class OutboxThread(Thread):
    message: Optional[str] = None


RECORDS: Dict[EntityKind, type] = {
    EntityKind.FACEBOOK_TYPE: FacebookType,
    EntityKind.NAMED: NamedFacebookType,
    EntityKind.CATEGORIZED: CategorizedFacebookType,
    EntityKind.USER: User,
    EntityKind.POST: Post,
    EntityKind.LIKES: Likes,
    EntityKind.COMMENT: Comment,
    EntityKind.COMMENT_LIST: CommentList,
    EntityKind.PAGE: Page,
    EntityKind.EVENT: Event,
    EntityKind.ALBUM: Album,
    EntityKind.PHOTO: Photo,
    EntityKind.CHECKIN: Checkin,
    EntityKind.PLACE: Place,
    EntityKind.LOCATION: Location,
    EntityKind.GROUP: Group,
    EntityKind.MEMBER: Member,
    EntityKind.LINK: Link,
    EntityKind.NOTE: Note,
    EntityKind.STATUS_MESSAGE: StatusMessage,
    EntityKind.VIDEO: Video,
    EntityKind.APPLICATION: Application,
    EntityKind.APPLICATION_TAGGED: ApplicationTagged,
    EntityKind.ACCOUNT: Account,
    EntityKind.INSIGHT: Insight,
    EntityKind.PAGE_CONNECTION: PageConnection,
    EntityKind.THREAD: Thread,
    EntityKind.OUTBOX_THREAD: OutboxThread,
}


def _field_map(cls: type) -> Tuple[FieldSpec, ...]:
    """Tabla JSON -> atributo de un dataclass. 'from_' se lee de la clave 'from'."""
    out = []
    for f in fields(cls):
        meta = f.metadata
        key = meta.get("key") or f.name.rstrip("_")
        out.append(FieldSpec(key, f.name, meta.get("conv", RAW), meta.get("kind"), meta.get("required", False)))
    return tuple(out)


FIELD_MAPS: Dict[EntityKind, Tuple[FieldSpec, ...]] = {
    kind: _field_map(cls) for kind, cls in RECORDS.items()
}

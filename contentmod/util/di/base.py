from dishka import Provider as DishkaProvider

from contentmod.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all contentmod DI providers; dependencies default to the APP scope."""

    scope = Scope.APP

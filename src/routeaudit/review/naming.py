"""
Controller name resolution.

Follows the Rails conventions through the `inflection` package, which ports
ActiveSupport's inflector:

    resources :users                      -> UsersController
    resource :profile                     -> ProfilesController
    resources :users, controller: 'admin/people'
                                          -> Admin::PeopleController
    namespace :admin { resources :users } -> Admin::UsersController
"""

from typing import Optional, Sequence

import inflection


CONTROLLER_SUFFIX = "Controller"
SCOPE_SEPARATOR = "::"


def resource_table_name(subject: str) -> str:
    """Subject of a declaration in table form: 'Admin::User' -> 'admin_users'."""
    return inflection.tableize(subject.replace("::", ""))


def class_name(name: str) -> str:
    """'admin/user_profiles' -> 'Admin::UserProfiles'"""
    return SCOPE_SEPARATOR.join(inflection.camelize(segment) for segment in name.split("/"))


def controller_class_name(name: str, namespaces: Sequence[str] = ()) -> str:
    """Qualify a controller path under the active namespaces, outermost first."""
    prefix = "".join(f"{class_name(namespace)}{SCOPE_SEPARATOR}" for namespace in namespaces)
    return f"{prefix}{class_name(name)}{CONTROLLER_SUFFIX}"


def resolve_controller_name(subject: str, controller: Optional[str] = None,
                            namespaces: Sequence[str] = ()) -> str:
    """
    Fully qualified controller name for a declaration.

    An explicit `controller:` option is used as-is (it is already a path);
    otherwise the subject is tableized.
    """
    name = controller if controller is not None else resource_table_name(subject)
    return controller_class_name(name, namespaces)

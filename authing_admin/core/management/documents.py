"""GraphQL documents sent to the Authing ``/graphql/v2`` endpoint."""

_USER_FIELDS = """
      id
      arn
      userPoolId
      username
      email
      emailVerified
      phone
      phoneVerified
      unionid
      openid
      nickname
      registerSource
      photo
      token
      tokenExpiredAt
      loginsCount
      lastLogin
      lastIP
      signedUp
      blocked
      isDeleted
      company
      name
      givenName
      familyName
      preferredUsername
      gender
      birthdate
      locale
      address
      city
      province
      country
      externalId
      createdAt
      updatedAt
"""

_NODE_FIELDS = """
      id
      orgId
      name
      nameI18n
      description
      descriptionI18n
      order
      code
      root
      depth
      path
      createdAt
      updatedAt
      children
"""

# The credential-exchange query; requests whose query starts with
# ACCESS_TOKEN_PREFIX are sent without a bearer header.
ACCESS_TOKEN_PREFIX = "query accessToken"

ACCESS_TOKEN_DOCUMENT = """query accessToken($userPoolId: String!, $secret: String!) {
  accessToken(userPoolId: $userPoolId, secret: $secret) {
    accessToken
    exp
    iat
  }
}
"""

LIST_USER_DOCUMENT = """query users($page: Int, $limit: Int, $sortBy: SortByEnum) {
  users(page: $page, limit: $limit, sortBy: $sortBy) {
    totalCount
    list {%s    }
  }
}
""" % _USER_FIELDS

ROLES_DOCUMENT = """query roles($namespace: String, $page: Int, $limit: Int, $sortBy: SortByEnum) {
  roles(namespace: $namespace, page: $page, limit: $limit, sortBy: $sortBy) {
    totalCount
    list {
      id
      namespace
      code
      arn
      description
      isSystem
      createdAt
      updatedAt
      parent {
        code
        description
        namespace
      }
    }
  }
}
"""

ROLE_WITH_USERS_DOCUMENT = """query roleWithUsers($code: String!, $namespace: String, $page: Int, $limit: Int) {
  role(code: $code, namespace: $namespace) {
    users(page: $page, limit: $limit) {
      totalCount
      list {%s      }
    }
  }
}
""" % _USER_FIELDS

ORG_DOCUMENT = """query org($id: String!) {
  org(id: $id) {
    id
    rootNode {%s    }
    nodes {%s    }
  }
}
""" % (_NODE_FIELDS, _NODE_FIELDS)

LIST_NODE_BY_ID_MEMBERS_DOCUMENT = """query nodeByIdWithMembers($page: Int, $limit: Int, $sortBy: SortByEnum, $includeChildrenNodes: Boolean, $nodeId: String!) {
  nodeById(id: $nodeId) {%s    users(page: $page, limit: $limit, sortBy: $sortBy, includeChildrenNodes: $includeChildrenNodes) {
      totalCount
      list {%s      }
    }
  }
}
""" % (_NODE_FIELDS, _USER_FIELDS)

SEND_MAIL_DOCUMENT = """mutation sendEmail($email: String!, $scene: EmailScene!) {
  sendEmail(email: $email, scene: $scene) {
    message
    code
  }
}
"""

CHECK_LOGIN_STATUS_DOCUMENT = """query checkLoginStatus($token: String) {
  checkLoginStatus(token: $token) {
    code
    message
    status
    exp
    iat
    data {
      id
      userPoolId
      arn
    }
  }
}
"""
